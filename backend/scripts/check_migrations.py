"""
CI guard for the migration history.

Fails when the revision graph has more than one head, or when the models
in ``hisaabu.db.models`` differ from what the migrations produce on the
database named by ``DATABASE_URL``.
"""

import sys
from pathlib import Path

from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BACKEND_DIR))

import hisaabu.db.models  # noqa: F401, E402
from hisaabu.core.config import get_settings  # noqa: E402
from hisaabu.db.base import Base  # noqa: E402
from hisaabu.db.session import build_engine  # noqa: E402


def check_single_head(cfg: Config) -> bool:
    heads = list(ScriptDirectory.from_config(cfg).get_heads())
    if len(heads) != 1:
        print(f"[FAIL] Alembic heads={len(heads)} -> {heads}")
        return False
    print(f"[OK] Alembic single head: {heads[0]}")
    return True


def check_drift() -> bool:
    engine = build_engine(get_settings())
    try:
        with engine.connect() as conn:
            ctx = MigrationContext.configure(conn, opts={"compare_type": True})
            diff = compare_metadata(ctx, Base.metadata)
    finally:
        engine.dispose()

    if diff:
        print("[FAIL] Models and database schema differ:", file=sys.stderr)
        for op in diff:
            print(f"  {op}", file=sys.stderr)
        print("Generate and commit a migration before merging.", file=sys.stderr)
        return False
    print("[OK] No schema drift")
    return True


def main() -> int:
    cfg = Config(str(BACKEND_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))

    if not check_single_head(cfg):
        return 1
    if "--heads-only" in sys.argv[1:]:
        return 0
    return 0 if check_drift() else 1


if __name__ == "__main__":
    raise SystemExit(main())
