# taskmanager/db/migrations.py
import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

log = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[2]


def alembic_config(url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    # configparser 보간 회피
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    # 앱 로깅 설정을 덮어쓰지 않도록
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(url: Optional[str] = None, revision: str = "head") -> None:
    """Explicit schema upgrade, run once at startup (or from a deploy step)."""
    from taskmanager.db.session import DATABASE_URL, _mask

    target = url or DATABASE_URL
    log.info("Applying migrations to %s (%s)", _mask(target), revision)
    command.upgrade(alembic_config(target), revision)
