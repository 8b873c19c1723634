"""
Interactive password settings prompts
"""

from rdmpass.security_limits import (
    DEFAULT_PASSWORD_LENGTH,
    DEFAULT_REQUIRED_MOVES,
    MAX_CUSTOM_CHARACTERS,
    MAX_PASSWORD_LENGTH,
    MAX_REQUIRED_MOVES,
    MIN_PASSWORD_LENGTH,
    MIN_REQUIRED_MOVES,
)


class SettingsPrompts:
    """Collects generation settings in the wire format /generate expects"""

    def collect_all(self):
        """Collect all password settings"""
        settings = {}

        settings['length'] = self._prompt_length()
        settings['includeLowercase'] = self._prompt_yes_no("Lowercase (a-z)?", True)
        settings['includeUppercase'] = self._prompt_yes_no("Uppercase (A-Z)?", True)
        settings['includeNumbers'] = self._prompt_yes_no("Numbers (0-9)?", True)
        settings['includeSymbols'] = self._prompt_yes_no("Symbols (!@#$...)?", True)
        settings['includeExtendedLatin'] = self._prompt_yes_no("Extended Latin?", False)
        settings['customCharacters'] = self._prompt_custom()
        settings['requireEachSelected'] = self._prompt_yes_no("Require one of each selected?", False)

        return settings

    def prompt_required_moves(self):
        """Prompt for how many motion samples make up one seed"""
        print("[RDMPASS] Number of movements to collect?")
        while True:
            try:
                value = input(f"       Enter number (default: {DEFAULT_REQUIRED_MOVES}): ").strip()
                if value == '':
                    return DEFAULT_REQUIRED_MOVES
                value = int(value)
                if not MIN_REQUIRED_MOVES <= value <= MAX_REQUIRED_MOVES:
                    print(f"       Must be between {MIN_REQUIRED_MOVES} and {MAX_REQUIRED_MOVES}")
                    continue
                return value
            except ValueError:
                print("       Please enter a valid number")

    def _prompt_length(self):
        print("\n[RDMPASS] Password length?")
        while True:
            try:
                value = input(f"       Enter length (default: {DEFAULT_PASSWORD_LENGTH}): ").strip()
                if value == '':
                    return DEFAULT_PASSWORD_LENGTH
                value = int(value)
                if not MIN_PASSWORD_LENGTH <= value <= MAX_PASSWORD_LENGTH:
                    print(f"       Must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}")
                    continue
                return value
            except ValueError:
                print("       Please enter a valid number")

    def _prompt_yes_no(self, question, default):
        hint = "[Y/n]" if default else "[y/N]"
        while True:
            choice = input(f"       {question} {hint}: ").strip().lower()
            if choice == '':
                return default
            if choice in ('y', 'yes'):
                return True
            if choice in ('n', 'no'):
                return False
            print("       Please enter y or n")

    def _prompt_custom(self):
        while True:
            value = input("       Custom characters (optional): ")
            if len(value) <= MAX_CUSTOM_CHARACTERS:
                return value
            print(f"       At most {MAX_CUSTOM_CHARACTERS} characters")
