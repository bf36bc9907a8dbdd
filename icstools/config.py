# Loads the TOML configuration file, which maps local paths to remote calendar URLs and says how
# those calendars should be anonymized. Everything is validated here so that a bad configuration
# stops the server from starting, rather than failing on every request.

import os
import tomllib
from urllib.parse import urlparse

from icstools.errors import ConfigError, MissingSeed
from icstools.fetch import DEFAULT_TIMEOUT
from icstools.policy import OperatingMode, UnknownPropertyPolicy
from icstools.pseudonym import check_seed
from icstools.render import ParamStyle
from icstools.transcode import DEFAULT_DTSTAMP, DEFAULT_PRODID, HeaderMode, TranscodeSettings


class Config:
    """
    The whole, validated configuration. This is created once at startup and only ever read
    after that.
    """

    calendars: dict[str, str]
    settings: TranscodeSettings
    fetch_timeout: float

    def __init__(self, calendars, settings, fetch_timeout=DEFAULT_TIMEOUT):
        self.calendars = calendars
        self.settings = settings
        self.fetch_timeout = fetch_timeout

    def __repr__(self):
        return f"Config(calendars={sorted(self.calendars)}, settings={self.settings!r}, fetch_timeout={self.fetch_timeout})"


def resolve_env(value, key):
    """
    Resolves values of the form `env:ENV_VAR` from the environment, leaving anything else as
    is.
    """

    if not isinstance(value, str) or not value.startswith("env:"):
        return value

    env_var = value[4:]
    resolved = os.environ.get(env_var)
    if not resolved:
        raise ConfigError(f"No value for `{key}` in `{env_var}`")
    return resolved


def parse_enum(enum_cls, value, key):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(f'"{v.value}"' for v in enum_cls)
        raise ConfigError(f"Invalid value {value!r} for `{key}`, expected one of {allowed}") from None


def parse_calendars(raw):
    if not isinstance(raw, dict) or not raw:
        raise ConfigError("The `[calendars]` section must map at least one path to a remote URL")

    calendars = {}
    for path, url in raw.items():
        url = resolve_env(url, f"calendars.{path}")
        if not isinstance(url, str) or urlparse(url).scheme not in ("http", "https") or not urlparse(url).netloc:
            raise ConfigError(f"Calendar `{path}` does not have a valid http(s) URL")
        calendars[path] = url
    return calendars


def parse_settings(raw) -> TranscodeSettings:
    """
    Builds the transcoding settings from the `[config]` section, checking that everything the
    chosen operating mode needs is there.
    """

    mode = parse_enum(OperatingMode, raw.get("mode", OperatingMode.ANONYMIZE.value), "mode")
    settings = TranscodeSettings(
        mode=mode,
        message=raw.get("message"),
        ignore_if_summary_is=raw.get("ignore_if_summary_is"),
        unknown_properties=parse_enum(UnknownPropertyPolicy, raw.get("unknown_properties", "strict"), "unknown_properties"),
        param_style=parse_enum(ParamStyle, raw.get("param_style", "bare"), "param_style"),
        header=parse_enum(HeaderMode, raw.get("header", "fixed"), "header"),
        prodid=raw.get("prodid", DEFAULT_PRODID),
        dtstamp=raw.get("dtstamp", DEFAULT_DTSTAMP),
    )

    if mode == OperatingMode.ANONYMIZE:
        if not settings.message:
            raise ConfigError("`message` is required when anonymizing")
        seed = resolve_env(raw.get("seed"), "seed")
        if not seed:
            raise MissingSeed()
        if not isinstance(seed, str):
            raise ConfigError("`seed` must be a string")
        settings.seed = seed.encode("utf-8")
        check_seed(settings.seed)
    elif not settings.ignore_if_summary_is:
        raise ConfigError("`ignore_if_summary_is` is required when ignoring matching events")

    return settings


def parse_config(raw) -> Config:
    section = raw.get("config", {})
    if not isinstance(section, dict):
        raise ConfigError("`config` must be a table")

    timeout = section.get("fetch_timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("`fetch_timeout` must be a positive number of seconds")

    return Config(parse_calendars(raw.get("calendars")), parse_settings(section), timeout)


def load_config(path) -> Config:
    """
    Loads and validates the configuration file at the given path.
    """

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {path}: {e.strerror}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Configuration file {path} is not valid TOML: {e}") from e

    try:
        return parse_config(raw)
    except ConfigError as e:
        raise e.with_context(f"Loading configuration file {path}")
