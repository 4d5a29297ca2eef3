"""
Test the configuration module.
"""
import os
import unittest
from ollama_minitools.config import Settings, default_data_dir
from ollama_minitools.errors import ConfigurationError


class TestSettings(unittest.TestCase):
    """
    Test the settings resolved from the environment.
    """

    def test_xdg_defaults(self):
        settings = Settings.from_env({"XDG_DATA_HOME": "/xdg"})

        self.assertIsNone(settings.ollama_user)
        self.assertEqual(settings.ollama_bin, "ollama")
        self.assertEqual(settings.data_dir, os.path.join("/xdg", "OllamaMiniTools"))
        self.assertEqual(settings.llama_cpp_bin_dir,
                         os.path.join("/xdg", "OllamaMiniTools", "llamacpp-bin"))
        self.assertEqual(settings.gguf_split_cmd,
                         os.path.join("/xdg", "OllamaMiniTools", "llamacpp-bin", "llama-gguf-split"))
        self.assertEqual(settings.download_timeout, 1200)

    def test_home_default(self):
        expected = os.path.join(os.path.expanduser("~"), ".local", "share", "OllamaMiniTools")
        self.assertEqual(default_data_dir({}), expected)

    def test_overrides(self):
        settings = Settings.from_env({
            "OLLAMA_USER": "alice",
            "OLLAMA_BIN": "/usr/local/bin/ollama",
            "OLLAMA_MINITOOLS_DATA_DIR": "/data",
            "OLLAMA_MINITOOLS_BIN_DIR": "/tools",
            "OLLAMA_MINITOOLS_TIMEOUT": "30",
        })

        self.assertEqual(settings.ollama_user, "alice")
        self.assertEqual(settings.ollama_bin, "/usr/local/bin/ollama")
        self.assertEqual(settings.data_dir, "/data")
        self.assertEqual(settings.llama_cpp_bin_dir, "/tools")
        self.assertEqual(settings.gguf_split_cmd, os.path.join("/tools", "llama-gguf-split"))
        self.assertEqual(settings.download_timeout, 30)

    def test_bin_dir_follows_data_dir(self):
        settings = Settings.from_env({"OLLAMA_MINITOOLS_DATA_DIR": "/data"})
        self.assertEqual(settings.llama_cpp_bin_dir, os.path.join("/data", "llamacpp-bin"))

    def test_empty_user_is_missing(self):
        self.assertIsNone(Settings.from_env({"OLLAMA_USER": ""}).ollama_user)

    def test_invalid_timeout(self):
        for value in ("abc", "0", "-5"):
            with self.assertRaises(ConfigurationError) as cm:
                Settings.from_env({"OLLAMA_MINITOOLS_TIMEOUT": value})
            self.assertIn("OLLAMA_MINITOOLS_TIMEOUT", cm.exception.message)
            self.assertTrue(cm.exception.hints)

    def test_empty_timeout_is_default(self):
        self.assertEqual(Settings.from_env({"OLLAMA_MINITOOLS_TIMEOUT": ""}).download_timeout, 1200)

    def test_zip_url(self):
        settings = Settings.from_env({})
        self.assertEqual(
            settings.llama_cpp_zip_url,
            "https://github.com/ggml-org/llama.cpp/releases/download/b6811/llama-b6811-bin-ubuntu-x64.zip",
        )


if __name__ == "__main__":
    unittest.main()
