"""Create missing tables (users, listings) without touching existing rows."""
from adboard.database import ensure_tables_exist


def main():
    ensure_tables_exist()
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
