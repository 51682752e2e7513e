from dataclasses import dataclass, asdict, fields
from typing import Dict, Any
import config


@dataclass
class AppState:
    """
    UI state shared by the main window and its pages.
    Serialised to JSON between sessions.
    """
    sidebar_open: bool = True
    dark_mode: bool = True
    active_page: str = "dashboard"
    language: str = "English"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppState":
        """
        Builds a state from saved data.
        Unknown keys are ignored, values of the wrong type fall back to the defaults.
        """
        state = cls()
        if not isinstance(data, dict):
            return state

        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if isinstance(value, type(getattr(state, f.name))):
                setattr(state, f.name, value)

        if state.active_page not in config.PAGES:
            state.active_page = "dashboard"
        if state.language not in config.LANGUAGES:
            state.language = "English"
        return state
