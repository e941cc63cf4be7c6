from wvb_desktop_daemon.config.settings import Settings

__all__ = ["Settings"]
