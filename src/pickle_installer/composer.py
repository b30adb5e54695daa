"""Host context handed to installers."""

from .config import Config
from .download_manager import DownloadManager, LocalDownloadManager


class Composer:
    """Bundles the host services an installer needs."""

    def __init__(
        self,
        config: Config | None = None,
        download_manager: DownloadManager | None = None,
    ):
        self.config = config or Config()
        self.download_manager = download_manager or LocalDownloadManager()

    def get_config(self) -> Config:
        return self.config

    def get_download_manager(self) -> DownloadManager:
        return self.download_manager
