# --- START OF FILE database/models/guide.py ---
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GuideStep:
    """One page of a guide, stored as JSON under guide:{GROUP}:{step}."""
    group_code: str
    step_number: int
    text: str
    media_ref: Optional[str] = None
    download_link: Optional[str] = None
    display_name: Optional[str] = None

    def __post_init__(self):
        if not self.display_name:
            self.display_name = self.group_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "mediaRef": self.media_ref,
            "downloadLink": self.download_link,
            "displayName": self.display_name,
        }

    @classmethod
    def from_dict(cls, group_code: str, step_number: int, data: Dict[str, Any]) -> "GuideStep":
        # image_file_id is the field name older records were written with
        return cls(
            group_code=group_code,
            step_number=step_number,
            text=data.get("text") or "",
            media_ref=data.get("mediaRef") or data.get("image_file_id") or None,
            download_link=data.get("downloadLink") or None,
            display_name=data.get("displayName") or None,
        )

    def __repr__(self) -> str:
        return f"<GuideStep(group='{self.group_code}', step={self.step_number})>"

# --- END OF FILE database/models/guide.py ---
