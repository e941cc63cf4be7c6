from wvb_desktop_daemon.http.app import create_app

__all__ = ["create_app"]
