# FILE: shared/translator.py

import json
import os
import logging

LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class Translator:
    def __init__(self):
        self._translations_cache = {}
        self._lang_code = DEFAULT_LANGUAGE
        self._is_reloading = False

    def load_language(self, lang_code=None):
        """
        Loads all .json language files from strings/<lang_code>/ into the cache.
        Each file is loaded under its own namespace (the filename).
        """
        lang_code = lang_code or self._lang_code
        LOGGER.info(f"--- [Translator] Loading language '{lang_code}' ---")

        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        lang_dir = os.path.join(project_root, 'strings', lang_code)

        if not os.path.isdir(lang_dir):
            LOGGER.error(f"[Translator] Language directory not found at: {lang_dir}")
            if lang_code != DEFAULT_LANGUAGE:
                self.load_language(DEFAULT_LANGUAGE)
            return

        new_translations = {}
        json_files = sorted(f for f in os.listdir(lang_dir) if f.endswith('.json'))

        for file_name in json_files:
            file_path = os.path.join(lang_dir, file_name)
            namespace = os.path.splitext(file_name)[0]
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    new_translations[namespace] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                LOGGER.error(f"[Translator] Failed to load '{file_name}' into namespace '{namespace}': {e}")

        self._translations_cache = new_translations
        self._lang_code = lang_code
        LOGGER.info(f"--- [Translator] Language '{lang_code}' loaded with {len(self._translations_cache)} namespaces. ---")

    def get(self, key, **kwargs):
        """
        Returns the string for a dotted key such as 'guides.usage_add',
        formatted with kwargs. Loads the language lazily on first use and
        returns the key itself when it is missing.
        """
        if not self._translations_cache and not self._is_reloading:
            self._is_reloading = True
            try:
                self.load_language()
            finally:
                self._is_reloading = False

        try:
            return self._get_from_dict(self._translations_cache, key, **kwargs)
        except (KeyError, TypeError):
            LOGGER.error(f"[Translator] Key '{key}' not found.")
            return key

    def _get_from_dict(self, dictionary, key, **kwargs):
        """Helper function to navigate the dictionary."""
        value = dictionary
        for k in key.split('.'):
            value = value[k]

        if kwargs:
            return value.format(**kwargs)
        return value


# --- SINGLETON INSTANCE AND ALIAS ---

translator = Translator()
get = translator.get
_ = translator.get


def init_translator(lang_code=None):
    """Initializes the translator at startup."""
    translator.load_language(lang_code)
