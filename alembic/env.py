# alembic/env.py
from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
import os, sys, pathlib

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from wsgi import app  # noqa: E402
from scoutboard.extensions import db  # noqa: E402


def _database_url():
    url = os.getenv("DATABASE_URL") or app.config.get("SQLALCHEMY_DATABASE_URI")
    # Flask-SQLAlchemy は相対 sqlite パスを instance/ 配下に置く
    if url and url.startswith("sqlite:///") and not url.startswith("sqlite:////"):
        instance_dir = pathlib.Path(app.instance_path)
        instance_dir.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{(instance_dir / url[len('sqlite:///'):]).as_posix()}"
    return url


with app.app_context():
    import scoutboard.models  # noqa: F401
    url = _database_url()
    target_metadata = db.metadata


def run_migrations_offline():
    context.configure(url=url, target_metadata=target_metadata,
                      literal_binds=True, compare_type=True, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config({"sqlalchemy.url": url},
                                     prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata,
                          compare_type=True, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
