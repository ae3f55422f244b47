"""Runtime settings read from the environment (and an optional .env file)."""

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from database import DEFAULT_KEY

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class Settings:
    db_path: Path
    storage_key: str
    gedcom_path: Path | None
    plot_path: Path
    log_level: str


def load_settings() -> Settings:
    load_dotenv()
    gedcom = os.getenv("LEGACYTREE_GEDCOM_PATH")
    return Settings(
        db_path=Path(os.getenv("LEGACYTREE_DB_PATH", PROJECT_ROOT / "family_tree.db")),
        storage_key=os.getenv("LEGACYTREE_STORAGE_KEY", DEFAULT_KEY),
        gedcom_path=Path(gedcom) if gedcom else None,
        plot_path=Path(os.getenv("LEGACYTREE_PLOT_PATH", PROJECT_ROOT / "family_tree.png")),
        log_level=os.getenv("LEGACYTREE_LOG_LEVEL", "INFO").upper(),
    )
