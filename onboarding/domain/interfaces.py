"""Domain interfaces for persistence stores."""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

class ApplicationStore(ABC):
    @abstractmethod
    def save(self, application_id: str, filename: str, record: Dict[str, Any]) -> None: pass
    @abstractmethod
    def find(self, application_id: str) -> Optional[Dict[str, Any]]: pass
