"""HTTP server configuration."""

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """Uvicorn bind settings."""

    host: str
    port: int
    reload: bool

    @property
    def local_url(self) -> str:
        """URL printed at startup."""
        return f"http://localhost:{self.port}"
