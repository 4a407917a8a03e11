# =============================================================================
# scripts/setup_substock_tables.py
# One-time Supabase setup and bulk ledger import
# =============================================================================
"""
Usage:
    # Print the CREATE TABLE SQL (paste into the Supabase SQL Editor)
    python scripts/setup_substock_tables.py --sql-only

    # Load a historical export into the ledger
    python scripts/setup_substock_tables.py --import receipts.csv --kind IN
    python scripts/setup_substock_tables.py --import dispensed.csv --kind OUT

Credentials are read from .streamlit/secrets.toml:
    [supabase]
    url = "https://your-project.supabase.co"
    key = "your-service-role-key"
"""

import argparse
import sys
import tomllib
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from supabase import create_client  # noqa: E402

from substock_core.config import SubStockConfig  # noqa: E402
from substock_core.data.ledger_service import LedgerService  # noqa: E402
from substock_core.data.schema import create_tables_sql  # noqa: E402
from substock_core.inventory import MovementKind  # noqa: E402
from substock_core.logging import setup_logging  # noqa: E402
from substock_core.services import LedgerImportService  # noqa: E402


def load_secrets() -> dict:
    secrets_path = project_root / ".streamlit" / "secrets.toml"
    if not secrets_path.exists():
        print(f"ERROR: {secrets_path} not found.")
        sys.exit(1)
    with open(secrets_path, "rb") as f:
        return tomllib.load(f)


def print_sql(config: SubStockConfig):
    print("=" * 70)
    print(" SQL TO CREATE THE SUBSTOCK TABLES")
    print(" Copy this SQL and run it in Supabase SQL Editor")
    print("=" * 70)
    print(create_tables_sql(config))


def import_csv(config: SubStockConfig, supabase: dict, csv_path: str, kind: str) -> int:
    path = Path(csv_path)
    if not path.exists():
        print(f"ERROR: File not found: {path}")
        return 1

    client = create_client(supabase["url"], supabase["key"])
    service = LedgerImportService(LedgerService(config, client=client))

    print(f"Importing {path.name} as {kind} into {config.transactions_table}...")
    result = service.import_csv(path.read_bytes(), MovementKind(kind))
    if not result:
        print(f"ERROR [{result.error_code}]: {result.error}")
        return 1

    print(f"Imported {result.data} rows.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="SubStock RH store setup")
    parser.add_argument("--sql-only", action="store_true", help="Print table SQL and exit (default without --import)")
    parser.add_argument("--import", dest="csv_path", help="CSV export to load into the ledger")
    parser.add_argument("--kind", choices=["IN", "OUT"], default="IN", help="Movement type of the CSV rows")
    args = parser.parse_args()

    setup_logging(log_to_file=False)

    if args.sql_only or not args.csv_path:
        print_sql(SubStockConfig())
        return 0

    secrets = load_secrets()
    if "supabase" not in secrets:
        print("ERROR: [supabase] section missing from secrets.toml")
        return 1

    config = SubStockConfig.from_dict(dict(secrets.get("substock", {})))
    return import_csv(config, secrets["supabase"], args.csv_path, args.kind)


if __name__ == "__main__":
    sys.exit(main())
