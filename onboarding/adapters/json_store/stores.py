"""JSON File-based Store Implementations."""
import json
import os
import logging
from typing import Optional, Dict, Any
from pathlib import Path

from onboarding.domain.interfaces import ApplicationStore

logger = logging.getLogger(__name__)

class ApplicationJsonStore(ApplicationStore):
    """Stores one pretty-printed JSON file per application.

    Files are named ``<application_id>-<lastName>.json``; lookups match on the
    id prefix.
    """

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    def save(self, application_id: str, filename: str, record: Dict[str, Any]) -> None:
        if not filename.startswith(application_id):
            raise ValueError(f"Filename {filename} does not belong to application {application_id}")
        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self.base_dir / os.path.basename(filename)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(record, f, indent=2)
        logger.info(f"Application saved: {path.name}")

    def find(self, application_id: str) -> Optional[Dict[str, Any]]:
        if not application_id or not self.base_dir.is_dir():
            return None

        for name in sorted(os.listdir(self.base_dir)):
            if name.startswith(application_id) and name.endswith(".json"):
                with open(self.base_dir / name, 'r', encoding='utf-8') as f:
                    return json.load(f)
        return None
