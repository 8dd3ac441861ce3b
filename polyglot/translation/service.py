"""Phrasebook translation service.

Translation here is a lookup, never a network call: the service maps known
sentences to their counterpart in the target language and passes every
other text through unchanged. ``translate`` never raises.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

logger = logging.getLogger(__name__)

SOURCE_LANGUAGE = "english"

LANGUAGES = {
    "english": "English",
    "spanish": "Spanish",
    "french": "French",
    "german": "German",
    "chinese": "Chinese",
}

BUILTIN_PHRASEBOOK: Dict[str, Dict[str, str]] = {
    "spanish": {
        "Welcome to our quarterly review meeting.": "Bienvenidos a nuestra reunión de revisión trimestral.",
        "Thank you for joining us today.": "Gracias por acompañarnos hoy.",
        "The results look very promising.": "Los resultados parecen muy prometedores.",
        "Meeting in progress...": "Reunión en curso...",
    },
    "french": {
        "Welcome to our quarterly review meeting.": "Bienvenue à notre réunion de bilan trimestriel.",
        "Thank you for joining us today.": "Merci de vous joindre à nous aujourd'hui.",
        "The results look very promising.": "Les résultats semblent très prometteurs.",
        "Meeting in progress...": "Réunion en cours...",
    },
    "german": {
        "Welcome to our quarterly review meeting.": "Willkommen zu unserem vierteljährlichen Review-Meeting.",
        "Thank you for joining us today.": "Danke, dass Sie heute dabei sind.",
        "The results look very promising.": "Die Ergebnisse sehen sehr vielversprechend aus.",
        "Meeting in progress...": "Besprechung läuft...",
    },
    "chinese": {
        "Welcome to our quarterly review meeting.": "欢迎参加我们的季度评审会议。",
        "Thank you for joining us today.": "感谢各位今天的参与。",
        "The results look very promising.": "结果看起来非常有希望。",
        "Meeting in progress...": "会议进行中...",
    },
}


class TranslationService:
    """Maps (text, target language) to text using a phrasebook."""

    def __init__(self, phrasebook: Optional[Dict[str, Dict[str, str]]] = None):
        self.phrasebook: Dict[str, Dict[str, str]] = {
            language: dict(entries) for language, entries in BUILTIN_PHRASEBOOK.items()
        }
        if phrasebook:
            self.extend(phrasebook)

    @classmethod
    def from_file(cls, path: Optional[str]) -> "TranslationService":
        """Build a service from the built-in phrasebook plus an optional YAML file.

        The file maps language codes to ``{source sentence: translation}``.

        Raises:
            FileNotFoundError: the file does not exist
            ValueError: the file is not a mapping of mappings
        """
        service = cls()
        if not path:
            return service

        phrasebook_file = Path(path)
        if not phrasebook_file.exists():
            raise FileNotFoundError(f"Phrasebook file not found: {phrasebook_file}")

        try:
            with open(phrasebook_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in phrasebook: {e}")

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise ValueError("Phrasebook must map language codes to sentence mappings")

        service.extend(data)
        logger.info(f"Loaded phrasebook from {phrasebook_file}: {', '.join(sorted(data))}")
        return service

    def extend(self, phrasebook: Dict[str, Dict[str, str]]) -> None:
        for language, entries in phrasebook.items():
            self.phrasebook.setdefault(language, {}).update(
                {str(k): str(v) for k, v in entries.items()}
            )

    def translate(self, text: str, target_language: str) -> str:
        """Translate ``text``; unknown languages and sentences pass through unchanged."""
        try:
            if target_language == SOURCE_LANGUAGE:
                return text
            entries = self.phrasebook.get(target_language)
            if not entries:
                return text
            return entries.get(text.strip(), text)
        except Exception as e:
            logger.warning(f"Translation lookup failed, passing text through: {e}")
            return text
