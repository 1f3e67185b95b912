import re
from dataclasses import dataclass


_URI_RE = re.compile(r"^(?P<protocol>[A-Za-z]+):(?P<object_id>[^@]+)@(?P<host>.+):(?P<port>\d+)$")


@dataclass(frozen=True)
class URI:
    """
    Address of an object living in a remote runtime.

    Two URIs are the same reference when all four fields are equal.
    """
    protocol: str
    object_id: str
    host: str
    port: int

    def __post_init__(self) -> None:
        if not isinstance(self.port, int) or isinstance(self.port, bool):
            raise ValueError(f"port must be an integer, got {self.port!r}")
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "protocol", self.protocol.upper())

    @classmethod
    def parse(cls, text: str) -> "URI":
        """Parse the ``PYRO:object@host:port`` string form."""
        match = _URI_RE.match(text)
        if match is None:
            raise ValueError(f"invalid uri: {text!r}")

        host = match["host"]
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]

        return cls(
            protocol=match["protocol"],
            object_id=match["object_id"],
            host=host,
            port=int(match["port"]),
        )

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.protocol}:{self.object_id}@{host}:{self.port}"
