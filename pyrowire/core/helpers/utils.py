import logging
import re


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def parse_version(version: str) -> tuple[int, ...]:
    """
    Turn a version such as "1.41" or "1.0.8rc1" into a comparable tuple
    of integers. Anything after the leading numeric part is ignored.
    """
    match = re.match(r"^\s*(\d+(?:\.\d+)*)", version)
    if match is None:
        raise ValueError(f"unparsable version: {version!r}")
    return tuple(int(part) for part in match.group(1).split("."))


def format_version(version: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in version)
