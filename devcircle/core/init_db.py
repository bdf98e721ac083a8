import logging

from devcircle.db.base import Base, engine
import devcircle.models  # noqa: F401  모든 테이블을 metadata 에 등록

logger = logging.getLogger(__name__)

def init_db():
    Base.metadata.create_all(bind=engine)
    logger.info(f"테이블 생성 완료: {', '.join(sorted(Base.metadata.tables))}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
