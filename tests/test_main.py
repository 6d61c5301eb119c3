from pathlib import Path
from unittest.mock import MagicMock

from sio_gui.__main__ import THEME_PATH, load_theme, parse_args
from sio_gui.config import defaults


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.target == defaults.DEFAULT_TARGET
        assert args.timeout == defaults.CONNECT_TIMEOUT
        assert args.no_reconnect is False

    def test_overrides(self):
        args = parse_args(["-t", "http://h:9", "--timeout", "1.5", "--no-reconnect", "--log-level", "debug"])
        assert args.target == "http://h:9"
        assert args.timeout == 1.5
        assert args.no_reconnect is True
        assert args.log_level == "DEBUG"


class TestLoadTheme:

    def test_bundled_theme_is_applied(self):
        app = MagicMock()
        load_theme(app)
        assert THEME_PATH.exists()
        app.setStyleSheet.assert_called_once()

    def test_missing_theme_is_tolerated(self, tmp_path):
        app = MagicMock()
        load_theme(app, Path(tmp_path) / "missing.qss")
        app.setStyleSheet.assert_not_called()
