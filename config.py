import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

load_dotenv()

# Charge fichier YAML
CONFIG_FILE = Path(os.getenv("WALL_CONFIG", Path(__file__).with_name("config.yml")))
with open(CONFIG_FILE, "r", encoding="utf-8") as f:
    cfg = yaml.safe_load(f) or {}

# Connexion base
DB_PATH = os.getenv("DB_PATH", "sqlite+aiosqlite:///db.sqlite3")
DB_ECHO = os.getenv("DB_ECHO", str(cfg.get("db_echo", False))).lower() in ("1", "true", "yes")
POOL_SIZE = int(cfg.get("pool_size", 10))
MAX_OVERFLOW = int(cfg.get("max_overflow", 0))

# HTTP
HOST = os.getenv("HOST", cfg.get("host", "0.0.0.0"))
PORT = int(os.getenv("PORT", cfg.get("port", 8080)))
IDENTITY_HEADER = cfg.get("identity_header", "X-User-Id")

LOG_LEVEL = os.getenv("LOG_LEVEL", cfg.get("log_level", "INFO")).upper()
