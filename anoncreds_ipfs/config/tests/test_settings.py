import pytest

from unittest import TestCase

from ..error import SettingsError
from ..settings import Settings


class TestSettings(TestCase):
    def setUp(self):
        self.test_key = "TEST"
        self.test_value = "VALUE"
        self.test_settings = {self.test_key: self.test_value}
        self.test_instance = Settings(self.test_settings)

    def test_settings_init(self):
        """Test settings initialization."""
        for key in self.test_settings:
            assert key in self.test_instance
            assert self.test_instance[key] == self.test_settings[key]
            assert (
                self.test_instance.get_value(self.test_key) == self.test_settings[key]
            )
        with self.assertRaises(KeyError):
            self.test_instance["MISSING"]
        assert len(self.test_instance) == 1
        assert list(self.test_instance) == [self.test_key]

    def test_get_formats(self):
        """Test retrieval with formatting."""
        assert "Settings" in str(self.test_instance)
        with pytest.raises(TypeError):
            self.test_instance[0]
        settings = self.test_instance.extend(
            {"BOOL_T": "true", "BOOL_F": "false", "INT": "5", "BAD_INT": "five"}
        )
        assert settings.get_bool("BOOL_T") is True
        assert settings.get_bool("BOOL_F") is False
        assert settings.get_bool("MISSING") is None
        for value in ("FALSE", "no", "Off", "0", " false "):
            assert settings.extend({"FLAG": value}).get_bool("FLAG") is False
        for value in ("TRUE", "yes", "1", True):
            assert settings.extend({"FLAG": value}).get_bool("FLAG") is True
        assert settings.get_int("INT") == 5
        assert settings.get_int("MISSING", "INT") == 5
        assert settings.get_str("INT") == "5"
        assert settings.get_value("MISSING", default="x") == "x"
        with pytest.raises(SettingsError):
            settings.get_int("BAD_INT")
        assert "INT" not in self.test_instance
