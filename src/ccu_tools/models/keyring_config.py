from __future__ import annotations

import enum
import json
import keyring


class ConfigKey(enum.StrEnum):
    CCU_USERNAME = "CCU_USERNAME"
    CCU_PASSWORD = "CCU_PASSWORD"


class KeyringConfig(dict[ConfigKey, str]):
    """Settings stored as one JSON blob in the system keyring."""

    KR_SERVICE_NAME: str = "ccu-tools"
    KR_USERNAME: str = "config"

    def __enter__(self) -> KeyringConfig:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()

    @classmethod
    def load_from_keyring(cls) -> KeyringConfig:
        """Load the configuration from the keyring."""
        json_str = keyring.get_password(cls.KR_SERVICE_NAME, cls.KR_USERNAME)
        if json_str is None:
            return cls()
        return cls({ConfigKey(k): v for k, v in json.loads(json_str).items()})

    def get_with_prompt(self, key: ConfigKey) -> str:
        if self.get(key):
            return self[key]

        import rich
        import typer

        rich.print(f"[red]Error:[/red] Required config key '{key.value}' not set. "
                   f"Set AKAMAI_{key.value} or run 'ccu-tools config set {key.value} {{value}}'.")

        raise typer.Exit(1)

    def save(self):
        """Save the configuration to the keyring."""
        json_str = json.dumps(self)
        keyring.set_password(self.KR_SERVICE_NAME, self.KR_USERNAME, json_str)

    def to_masked_json(self) -> str:
        """Dump all known keys with their values masked."""
        result = {}
        for key in ConfigKey:
            if self.get(key):
                result[key] = "********"
            elif key in self:
                result[key] = ""
            else:
                result[key] = "(not set)"

        return json.dumps(result, indent=2)
