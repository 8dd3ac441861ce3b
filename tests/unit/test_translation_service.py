"""Unit tests for TranslationService."""

import pytest

from polyglot.translation.service import TranslationService


@pytest.mark.unit
class TestTranslationService:

    def test_known_sentence(self, translator):
        assert translator.translate("The results look very promising.", "french") == \
            "Les résultats semblent très prometteurs."

    def test_unknown_language_is_identity(self, translator):
        assert translator.translate("Thank you for joining us today.", "esperanto") == \
            "Thank you for joining us today."

    def test_english_is_identity(self, translator):
        assert translator.translate("Meeting in progress...", "english") == "Meeting in progress..."

    def test_unmapped_text_is_identity(self, translator):
        assert translator.translate("Something nobody wrote down", "spanish") == "Something nobody wrote down"

    def test_never_raises_on_bad_input(self, translator):
        assert translator.translate(None, "spanish") is None

    def test_extend(self):
        service = TranslationService({"spanish": {"Good morning": "Buenos días"}, "italian": {"Hi": "Ciao"}})

        assert service.translate("Good morning", "spanish") == "Buenos días"
        assert service.translate("Hi", "italian") == "Ciao"
        assert service.translate("Thank you for joining us today.", "spanish") == "Gracias por acompañarnos hoy."

    def test_from_file(self, temp_data_dir):
        path = f"{temp_data_dir}/phrasebook.yaml"
        with open(path, 'w', encoding='utf-8') as f:
            f.write("german:\n  Good morning: Guten Morgen\n")

        service = TranslationService.from_file(path)

        assert service.translate("Good morning", "german") == "Guten Morgen"

    def test_from_file_none_uses_builtin(self):
        service = TranslationService.from_file(None)

        assert service.translate("Meeting in progress...", "chinese") == "会议进行中..."

    def test_from_file_missing(self, temp_data_dir):
        with pytest.raises(FileNotFoundError):
            TranslationService.from_file(f"{temp_data_dir}/missing.yaml")

    def test_from_file_invalid_shape(self, temp_data_dir):
        path = f"{temp_data_dir}/phrasebook.yaml"
        with open(path, 'w', encoding='utf-8') as f:
            f.write("- just\n- a list\n")

        with pytest.raises(ValueError):
            TranslationService.from_file(path)
