from dataclasses import dataclass

DEFAULT_USER_AGENT = "lux-jsonrpc"
DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class ClientConfig:
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    # node endpoints commonly serve self-signed certificates
    verify_tls: bool = False
    verbose: bool = True
    pool_connections: int = 4
    pool_maxsize: int = 16
