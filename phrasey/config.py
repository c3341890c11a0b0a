import logging
import tomllib

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from . import utils
from .classes import LogLevel
from .exceptions import ConfigError, InvalidSettingValue

logger = logging.getLogger("phrasey.config")

MIN_INPUT_BOX_WIDTH = 30


class Config(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    db_conn_string: str
    log_level: LogLevel
    log_dir_uri: str | None = None
    input_box_width: int
    phrases_per_round: int

    @field_validator("db_conn_string")
    @classmethod
    def check_db_conn_string(cls, value: str) -> str:
        utils.strip_file_scheme(value)
        return value

    @field_validator("log_dir_uri")
    @classmethod
    def check_log_dir_uri(cls, value: str | None) -> str | None:
        if value is not None:
            utils.strip_file_scheme(value)
        return value

    @field_validator("input_box_width")
    @classmethod
    def check_input_box_width(cls, value: int) -> int:
        if value < MIN_INPUT_BOX_WIDTH:
            raise ValueError(f"Input box width must be greater than or equal to {MIN_INPUT_BOX_WIDTH}.")
        return value

    @field_validator("phrases_per_round")
    @classmethod
    def check_phrases_per_round(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Phrases per round must be greater than zero.")
        return value

    def working_copy(self) -> 'Config':
        return self.model_copy()

    def commit(self, other: 'Config'):
        """
        Copies every field of `other` into this object.
        The values are validated before anything is assigned.
        """
        values = self.model_validate(other.model_dump()).model_dump()
        for name, value in values.items():
            setattr(self, name, value)
        logger.info("Configuration updated")

    def with_value(self, name: str, raw: str) -> 'Config':
        """
        Returns a copy with `name` set to the parsed `raw` string.
        Raises InvalidSettingValue if the text is not an integer or fails validation.
        """
        try:
            value = int(raw.strip())
        except ValueError:
            raise InvalidSettingValue(f"'{raw}' is not a whole number") from None
        try:
            return self.model_validate({**self.model_dump(), name: value})
        except pydantic.ValidationError as e:
            raise InvalidSettingValue(e.errors()[0]["msg"]) from e


def load_config(path: str) -> Config:
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse configuration file {path}: {e}") from e
    try:
        config = Config.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e
    logger.debug(f"Configuration loaded: {config!r}")
    return config
