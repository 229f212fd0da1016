import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# Extraction output (person_*.json, company_*.json, relationship_*.json)
DATA_DIR = Path(os.getenv("PARCELPARTY_DATA_DIR", str(_PROJECT_ROOT / "data")))

# Owner sidecar written by `parcelparty owners`, read by `parcelparty extract`
OWNERS_DIR = Path(os.getenv("PARCELPARTY_OWNERS_DIR", str(_PROJECT_ROOT / "owners")))
OWNER_DATA_PATH = OWNERS_DIR / "owner_data.json"

# Logging
LOG_LEVEL = os.getenv("PARCELPARTY_LOG_LEVEL", "INFO").strip().upper() or "INFO"
