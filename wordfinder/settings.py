import os
from dataclasses import dataclass, field
from pathlib import Path

from wordfinder.solver import MAX_SIZE, NUMBER_OF_RESULTS


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    MATRIX_PATH: Path = field(init=False)
    WORDSTREAM_PATH: Path = field(init=False)

    MAX_SIZE: int = MAX_SIZE
    NUMBER_OF_RESULTS: int = NUMBER_OF_RESULTS

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.MATRIX_PATH = self.BASE_DIR / "Matrix.txt"
        self.WORDSTREAM_PATH = self.BASE_DIR / "Wordstream.json"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_SIZE": int,
    "NUMBER_OF_RESULTS": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to cfg. Returns a mapping of field -> error.

    Valid fields are applied even when others in the same call are rejected.
    """
    errors: dict[str, str] = {}
    for name, raw in values.items():
        if name not in cfg.__dataclass_fields__:
            errors[name] = "unknown setting"
            continue
        if name not in EDITABLE_FIELDS:
            errors[name] = "setting is not editable"
            continue

        kind = EDITABLE_FIELDS[name]
        if kind is bool:
            if isinstance(raw, bool):
                value = raw
            elif isinstance(raw, str):
                value = raw.lower() in ("1", "true", "yes")
            else:
                errors[name] = f"expected bool, got {type(raw).__name__}"
                continue
        else:
            if isinstance(raw, bool):
                errors[name] = "expected int, got bool"
                continue
            try:
                value = int(raw)
            except (TypeError, ValueError):
                errors[name] = f"expected int, got {raw!r}"
                continue
            if value <= 0:
                errors[name] = "must be positive"
                continue

        setattr(cfg, name, value)
    return errors


settings = Settings()
