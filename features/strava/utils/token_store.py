import json
import logging
from pathlib import Path
from typing import Optional, Union

from features.strava.models.strava_types import Credential

logger = logging.getLogger(__name__)

class TokenStore:
    """Persists the Strava credential as a JSON file."""

    def __init__(self, path: Union[str, Path] = "tokens.json"):
        self.path = Path(path)

    def load(self) -> Optional[Credential]:
        """Load the stored credential, None if nothing has been saved."""
        if not self.path.exists():
            return None

        with open(self.path, 'r') as f:
            data = json.load(f)

        if not data:
            return None
        return Credential.model_validate(data)

    def save(self, credential: Credential) -> None:
        """Write the credential to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(credential.model_dump(mode="json"), f, indent=2)
        logger.info(f"Saved Strava credential to {self.path}")
