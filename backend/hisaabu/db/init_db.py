from sqlalchemy.engine import Engine

from hisaabu.db.base import Base
import hisaabu.db.models  # noqa


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    from hisaabu.core.config import get_settings
    from hisaabu.db.session import build_engine

    init_db(build_engine(get_settings()))
