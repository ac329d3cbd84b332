"""Unit tests for mapping chooser results to launches."""

from unittest.mock import MagicMock, patch

import pytest

from i3_dmenu_desktop.core.config import XDGConfig
from i3_dmenu_desktop.core.dmenu import ChoiceError
from i3_dmenu_desktop.core.i3_client import I3Error
from i3_dmenu_desktop.core.launcher import AppLauncher, resolve_choice
from i3_dmenu_desktop.models.desktop_entry import DesktopEntry


def entry(name: str, exec_str: str, **kwargs) -> DesktopEntry:
    return DesktopEntry(
        name=name,
        exec=exec_str,
        type="Application",
        source_path=f"/apps/{name}.desktop",
        modified_time=1,
        **kwargs,
    )


@pytest.fixture
def app_map():
    return {
        "Firefox": entry("Firefox", "firefox %u"),
        "Firefox (2)": entry("Firefox", "firefox-esr %u"),
        "Htop": entry("Htop", "htop", terminal=True, startup_notify=False),
    }


class TestResolveChoice:
    """Test chooser result interpretation."""

    def test_exact_name(self, app_map):
        assert resolve_choice("Firefox", app_map) == (app_map["Firefox"], [])

    def test_name_with_argument(self, app_map):
        assert resolve_choice("Firefox https://example.org", app_map) == (
            app_map["Firefox"], ["https://example.org"],
        )

    def test_suffixed_name_with_argument(self, app_map):
        assert resolve_choice("Firefox (2) https://x", app_map) == (app_map["Firefox (2)"], ["https://x"])

    def test_argument_with_spaces_is_one_token(self, app_map):
        assert resolve_choice("Firefox a b", app_map) == (app_map["Firefox"], ["a b"])

    def test_rightmost_split_preferred(self):
        apps = {"Foo": entry("Foo", "foo %f"), "Foo Bar": entry("Foo Bar", "foobar %f")}
        assert resolve_choice("Foo Bar baz", apps) == (apps["Foo Bar"], ["baz"])

    def test_arbitrary_text(self, app_map):
        assert resolve_choice("xterm -e top", app_map) == (None, [])


class TestAppLauncher:
    """Test the launch flow with mocked collaborators."""

    @pytest.fixture
    def launcher(self, make_env, app_map):
        client = MagicMock()
        discovery = MagicMock()
        discovery.resolve_all.return_value = app_map
        config = XDGConfig(make_env({"HOME": "/home/max", "PATH": "/usr/bin", "LANG": "de_DE"}))
        return AppLauncher(config, client=client, discovery=discovery, terminal="alacritty")

    def test_get_app_map_uses_config(self, launcher, app_map):
        assert launcher.get_app_map() is app_map
        launcher.discovery.resolve_all.assert_called_once_with(
            ["/home/max/.local/share/applications", "/usr/local/share/applications", "/usr/share/applications"],
            ["/usr/bin"],
            "de_DE",
        )

    def test_launch_entry(self, launcher, app_map):
        launcher.launch("Firefox https://example.org", app_map)
        launcher.client.exec.assert_called_once_with('"firefox https://example.org"', startup_notify=True)

    def test_launch_terminal_entry(self, launcher, app_map):
        launcher.launch("Htop", app_map)
        launcher.client.exec.assert_called_once_with('alacritty -e "htop"', startup_notify=False)

    def test_launch_raw_command(self, launcher, app_map):
        launcher.launch("xterm -e top", app_map)
        launcher.client.exec_raw.assert_called_once_with("xterm -e top")
        launcher.client.exec.assert_not_called()

    def test_run(self, launcher):
        with patch("i3_dmenu_desktop.core.launcher.get_dmenu_choice", return_value="Firefox") as choose:
            launcher.run()
        choose.assert_called_once_with(["Firefox", "Firefox (2)", "Htop"], "dmenu -i")
        launcher.client.exec.assert_called_once_with('"firefox "', startup_notify=True)

    def test_run_empty_choice(self, launcher):
        with patch("i3_dmenu_desktop.core.launcher.get_dmenu_choice", return_value=""):
            launcher.run()
        launcher.client.exec.assert_not_called()
        launcher.client.exec_raw.assert_not_called()

    def test_choice_error_propagates(self, launcher):
        with patch("i3_dmenu_desktop.core.launcher.get_dmenu_choice", side_effect=ChoiceError("dmenu process failed")):
            with pytest.raises(ChoiceError):
                launcher.run()

    def test_launch_error_propagates(self, launcher):
        launcher.client.exec.side_effect = I3Error("no i3")
        with patch("i3_dmenu_desktop.core.launcher.get_dmenu_choice", return_value="Firefox"):
            with pytest.raises(I3Error):
                launcher.run()
