"""Backup the document database with ``mysqldump`` (must be on PATH)."""

from __future__ import annotations

import importlib
import subprocess
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from fieldforce.config import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{db['database']}_{ts}.sql"

    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
        "documents",
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        print(f"OK: Backup created: {out_file}")
    except FileNotFoundError:
        raise SystemExit("mysqldump not found; install the MySQL client tools.")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"Backup failed: {e.stderr.decode(errors='replace').strip()}")


if __name__ == "__main__":
    main()
