from jobhunter.database import ensure_tables_exist
from jobhunter.logging_config import setup_logging


def main():
    setup_logging()
    created = ensure_tables_exist()
    print(f"DB table check complete: created {len(created)} missing table(s).")


if __name__ == "__main__":
    main()
