"""
Test the utility functions.
"""
import subprocess
import unittest
from unittest.mock import patch, MagicMock
from ollama_minitools.errors import DelegationError
from ollama_minitools.utils import CommandRunner, CommandResult, ConsoleInput, confirm


class TestCommandRunner(unittest.TestCase):
    """
    Test the external command runner.
    """

    @patch("ollama_minitools.utils.subprocess.run")
    def test_run_captured(self, mock_run):
        """Test running a command with captured output."""
        mock_run.return_value = MagicMock(returncode=0, stdout="NAME ID SIZE MODIFIED\n")

        result = CommandRunner().run("ollama", ["list"], capture=True)

        self.assertEqual(result, CommandResult(0, "NAME ID SIZE MODIFIED\n"))
        mock_run.assert_called_once_with(
            ["ollama", "list"], stdout=subprocess.PIPE, text=True, check=False
        )

    @patch("ollama_minitools.utils.subprocess.run")
    def test_run_inherits_output(self, mock_run):
        """Exit codes are passed through; output is not captured."""
        mock_run.return_value = MagicMock(returncode=3, stdout=None)

        result = CommandRunner().run("ollama", ["create", "-f", "Modelfile", "a/b:c"])

        self.assertEqual(result.returncode, 3)
        self.assertIsNone(result.output)
        self.assertIsNone(mock_run.call_args.kwargs["stdout"])

    @patch("ollama_minitools.utils.subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("ollama")

        with self.assertRaises(DelegationError) as cm:
            CommandRunner().run("ollama", ["list"])

        self.assertIn("ollama", cm.exception.message)
        self.assertTrue(cm.exception.hints)


class TestConsoleInput(unittest.TestCase):
    """
    Test the interactive input provider.
    """

    @patch("builtins.input", return_value="")
    def test_ask_default(self, mock_input):
        answer = ConsoleInput().ask("Enter the model name", "Llama3")
        self.assertEqual(answer, "Llama3")
        mock_input.assert_called_once_with("Enter the model name [Llama3]: ")

    @patch("builtins.input", return_value="  Mistral ")
    def test_ask_answer(self, mock_input):
        self.assertEqual(ConsoleInput().ask("Enter the model name", "Llama3"), "Mistral")

    def test_confirm(self):
        provider = MagicMock()
        for answer, expected in (("y", True), ("Y", True), ("yes", False), ("n", False), ("", False)):
            provider.ask.return_value = answer
            self.assertEqual(confirm(provider, "Proceed? (y/n)"), expected)


if __name__ == "__main__":
    unittest.main()
