import importlib.util
from pathlib import Path

SEED_MIGRATION = (
    Path(__file__).resolve().parents[2]
    / "migrations" / "versions" / "8e3f0b6a71c2_seed_default_notification_templates.py"
)


def _load_seed_migration():
    module_spec = importlib.util.spec_from_file_location("seed_default_notification_templates", SEED_MIGRATION)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


# The exact rows `alembic upgrade head` inserts.
DEFAULT_TEMPLATES = _load_seed_migration().DEFAULT_TEMPLATES
