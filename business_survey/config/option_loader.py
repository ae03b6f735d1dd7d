import json
from typing import Dict, List, Any
from pathlib import Path

class OptionLoader:
    """Utility class to load and cache the survey's closed option sets from a JSON file."""

    def __init__(self, config_path: str | None = None):
        if config_path is None:
            # Default to options.json in the same directory as this file
            current_dir = Path(__file__).parent
            config_path = str(current_dir / "options.json")

        self.config_path = Path(config_path)
        self._config_cache = None

    def load_config(self) -> Dict[str, Any]:
        """Load option sets from JSON file with caching."""
        if self._config_cache is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config_cache = json.load(f)
            except FileNotFoundError:
                raise FileNotFoundError(f"Option file not found: {self.config_path}")
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in option file: {e}")

        return self._config_cache

    def get_default(self) -> str:
        """Label used when the respondent leaves a dropdown untouched."""
        config = self.load_config()
        return config.get("default", "")

    def get_business_categories(self) -> List[str]:
        config = self.load_config()
        return list(config.get("business_category", []))

    def get_owner_relations(self) -> List[str]:
        config = self.load_config()
        return list(config.get("business_owner_relation", []))

    def as_dict(self) -> Dict[str, Any]:
        """Option sets in the shape the form endpoints return."""
        return {
            "business_category": self.get_business_categories(),
            "business_owner_relation": self.get_owner_relations(),
            "default": self.get_default(),
        }

    def reload_options(self):
        """Force reload of the option file (useful after redeploying it)."""
        self._config_cache = None
        return self.load_config()

# Global instance for easy access
option_loader = OptionLoader()
