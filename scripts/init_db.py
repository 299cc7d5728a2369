from __future__ import annotations

from dotenv import load_dotenv

from salary_system.config import get_settings_module, load_settings
from salary_system.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    db_config = dict(settings.db_config)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(
        f"OK: Applied schema.sql ({get_settings_module()}) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
