# --- START OF FILE database/models/welcome.py ---
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WelcomeConfig:
    text: str
    media_ref: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "mediaRef": self.media_ref}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WelcomeConfig":
        return cls(text=data.get("text") or "", media_ref=data.get("mediaRef") or None)

# --- END OF FILE database/models/welcome.py ---
