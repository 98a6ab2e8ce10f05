# reel_engine/infrastructure/output/profile_store.py
import os
import json
import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict


@dataclass
class PlayerProfile:
    exp: int = 0
    revive: int = 0
    highscore: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerProfile":
        known = {f.name for f in fields(cls)}
        return cls(**{k: int(v) for k, v in data.items() if k in known})


class ProfileStore:
    """
    Keeps the player profile in a small JSON file.

    ``load`` returns the stored profile, or writes and returns a default one
    when the file is missing or unreadable. Every update rewrites the whole
    file.
    """
    def __init__(self, file_path: str = "player.json", indent: int = 2):
        self.file_path = file_path
        self.indent = indent
        self.logger = logging.getLogger("infrastructure.output.profile")

    def load(self) -> PlayerProfile:
        if os.path.isfile(self.file_path):
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return PlayerProfile.from_dict(data)
                self.logger.warning(f"Profile file {self.file_path} does not hold an object")
            except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
                self.logger.warning(f"Could not read profile {self.file_path}: {e}")

        profile = PlayerProfile()
        try:
            self.save(profile)
        except OSError as e:
            self.logger.error(f"Could not write default profile {self.file_path}: {e}")
        return profile

    def save(self, profile: PlayerProfile):
        """
        Overwrite the profile file.

        Raises:
            OSError: If the file cannot be written
        """
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.file_path, 'w', encoding='utf-8') as f:
            json.dump(asdict(profile), f, indent=self.indent)
        self.logger.debug(f"Profile saved to {self.file_path}: {asdict(profile)}")

    def update_exp(self, value: int) -> PlayerProfile:
        return self._update(exp=value)

    def update_revive(self, value: int) -> PlayerProfile:
        return self._update(revive=value)

    def update_highscore(self, value: int) -> PlayerProfile:
        return self._update(highscore=value)

    def _update(self, **changes) -> PlayerProfile:
        profile = self.load()
        for key, value in changes.items():
            setattr(profile, key, int(value))
        self.save(profile)
        return profile
