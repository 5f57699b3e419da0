import asyncio
import logging
from urllib.parse import urljoin

import requests
from deep_translator import DeeplTranslator
from deep_translator.exceptions import AuthorizationException, ServerException, TranslationNotFound

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """The translation backend failed, timed out or returned nothing"""

    def __init__(self, target_language, detail):
        super().__init__(f"translation to {target_language} failed: {detail}")
        self.target_language = target_language
        self.detail = detail


class AutoDetectDeeplTranslator(DeeplTranslator):
    """DeeplTranslator that lets DeepL detect the source language.

    The request never carries source_lang; DeepL only auto-detects when the
    field is absent. The key goes in the Authorization header.
    """

    def __init__(self, api_key: str, target: str, use_free_api: bool = True, timeout=None):
        # source is required by the base class but never sent
        super().__init__(source="auto", target=target, api_key=api_key, use_free_api=use_free_api)
        self.timeout = timeout

    def translate(self, text: str, **kwargs) -> str:
        response = requests.post(
            urljoin(self._base_url, "translate"),
            headers={"Authorization": f"DeepL-Auth-Key {self.api_key}"},
            data={"target_lang": self._target.upper(), "text": text},
            timeout=self.timeout,
        )
        if response.status_code == 403:
            raise AuthorizationException(self.api_key)
        if response.status_code != 200:
            raise ServerException(response.status_code)
        translations = response.json().get("translations") or []
        if not translations:
            raise TranslationNotFound(text)
        return translations[0]["text"]


class DeepLTranslationService:
    """Translate text through DeepL without blocking the event loop"""

    def __init__(self, api_key: str, use_free_api: bool = True, timeout: float = 15):
        self.api_key = api_key
        self.use_free_api = use_free_api
        self.timeout = timeout

    def _translate_sync(self, text: str, target_language: str) -> str:
        translator = AutoDetectDeeplTranslator(
            self.api_key,
            target=target_language.lower(),
            use_free_api=self.use_free_api,
            timeout=self.timeout,
        )
        return translator.translate(text)

    async def translate(self, text: str, target_language: str) -> str:
        try:
            translated = await asyncio.wait_for(
                asyncio.to_thread(self._translate_sync, text, target_language),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise TranslationError(target_language, f"no response within {self.timeout}s")
        except Exception as e:
            raise TranslationError(target_language, e) from e

        if not translated or not translated.strip():
            raise TranslationError(target_language, "empty translation")
        return translated
