import json

from termite_tracker.model.settings import AppSettings, SettingsManager, get_settings_path


def test_missing_file_uses_defaults(tmp_path):
    manager = SettingsManager(get_settings_path(tmp_path))
    assert manager.settings == AppSettings()
    assert manager.settings.videos.time_stamp_range == 1.0


def test_sections_are_merged_with_defaults(tmp_path):
    path = get_settings_path(tmp_path)
    path.write_text(
        json.dumps(
            {
                "windows": {"size_width": 1600, "size_height": 900},
                "videos": {"size_width": 800, "size_height": 450, "fps": 60, "time_stamp_range": 0.5},
                "unknown": {"ignored": True},
            }
        )
    )
    settings = SettingsManager(path).settings

    assert (settings.windows.size_width, settings.windows.size_height) == (1600, 900)
    assert (settings.videos.size_width, settings.videos.size_height) == (800, 450)
    assert settings.videos.fps == 60
    assert settings.videos.time_stamp_range == 0.5
    assert settings.videos.delta_sec == 0.1
    assert settings.markers.body_length == 40


def test_malformed_file_falls_back_to_defaults(tmp_path):
    path = get_settings_path(tmp_path)
    path.write_text("{broken")
    assert SettingsManager(path).settings == AppSettings()


def test_save_round_trip(tmp_path):
    manager = SettingsManager(get_settings_path(tmp_path))
    manager.settings.data.locations_path = "labels/run1.json"
    manager.save()
    assert SettingsManager(get_settings_path(tmp_path)).settings.data.locations_path == "labels/run1.json"


def test_resolve_relative_paths(tmp_path):
    manager = SettingsManager(get_settings_path(tmp_path))
    assert manager.resolve("termite_video.mp4") == tmp_path / "termite_video.mp4"
    absolute = tmp_path / "elsewhere" / "video.mp4"
    assert manager.resolve(str(absolute)) == absolute
