"""Translate plugin - a demonstration translation service.

Translates a handful of phrases between eight languages from a built-in
table; other text gets a bracketed mock translation. Shows every content
type along with prompts and resources.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from mcp_runtime.plugins.base import PluginBase, ToolDefinition
from mcp_runtime.protocol.content import (
    create_html_content,
    create_json_content,
    create_text_content,
    create_tool_response,
)

LANGUAGES: dict[str, dict[str, str]] = {
    "en": {
        "name": "English",
        "family": "Indo-European",
        "script": "Latin",
        "speakers": "1.35 billion",
        "hello": "Hello",
    },
    "es": {
        "name": "Spanish",
        "family": "Indo-European",
        "script": "Latin",
        "speakers": "543 million",
        "hello": "Hola",
    },
    "fr": {
        "name": "French",
        "family": "Indo-European",
        "script": "Latin",
        "speakers": "267 million",
        "hello": "Bonjour",
    },
    "de": {
        "name": "German",
        "family": "Indo-European",
        "script": "Latin",
        "speakers": "132 million",
        "hello": "Hallo",
    },
    "zh": {
        "name": "Chinese (Mandarin)",
        "family": "Sino-Tibetan",
        "script": "Simplified/Traditional Chinese",
        "speakers": "1.12 billion",
        "hello": "你好",
    },
    "ja": {
        "name": "Japanese",
        "family": "Japonic",
        "script": "Kanji, Hiragana, Katakana",
        "speakers": "126 million",
        "hello": "こんにちは",
    },
    "ru": {
        "name": "Russian",
        "family": "Indo-European",
        "script": "Cyrillic",
        "speakers": "258 million",
        "hello": "Здравствуйте",
    },
    "ar": {
        "name": "Arabic",
        "family": "Afro-Asiatic",
        "script": "Arabic",
        "speakers": "274 million",
        "hello": "مرحبا",
    },
}

PHRASES: dict[str, dict[str, str]] = {
    "hello": {
        "en": "Hello",
        "es": "Hola",
        "fr": "Bonjour",
        "de": "Hallo",
        "zh": "你好",
        "ja": "こんにちは",
        "ru": "Здравствуйте",
        "ar": "مرحبا",
    },
    "goodbye": {
        "en": "Goodbye",
        "es": "Adiós",
        "fr": "Au revoir",
        "de": "Auf Wiedersehen",
        "zh": "再见",
        "ja": "さようなら",
        "ru": "До свидания",
        "ar": "وداعا",
    },
    "thank you": {
        "en": "Thank you",
        "es": "Gracias",
        "fr": "Merci",
        "de": "Danke",
        "zh": "谢谢",
        "ja": "ありがとう",
        "ru": "Спасибо",
        "ar": "شكرا لك",
    },
    "welcome": {
        "en": "Welcome",
        "es": "Bienvenido",
        "fr": "Bienvenue",
        "de": "Willkommen",
        "zh": "欢迎",
        "ja": "ようこそ",
        "ru": "Добро пожаловать",
        "ar": "أهلا بك",
    },
    "yes": {
        "en": "Yes",
        "es": "Sí",
        "fr": "Oui",
        "de": "Ja",
        "zh": "是的",
        "ja": "はい",
        "ru": "Да",
        "ar": "نعم",
    },
    "no": {
        "en": "No",
        "es": "No",
        "fr": "Non",
        "de": "Nein",
        "zh": "不",
        "ja": "いいえ",
        "ru": "Нет",
        "ar": "لا",
    },
}

DETECTION_CONFIDENCE = 0.8

TRANSLATION_HELP = """# Translation Help

This service provides translation capabilities between the following languages:

- English (en)
- Spanish (es)
- French (fr)
- German (de)
- Chinese (zh)
- Japanese (ja)
- Russian (ru)
- Arabic (ar)

When translating text, you can specify both the source and target language codes.
If the source language is not specified, the service will attempt to detect it automatically.
"""

LANGUAGE_FAMILIES_HTML = """<h2>Language Families</h2>
<ul>
    <li><strong>Indo-European</strong>: English, Spanish, French, German, Russian</li>
    <li><strong>Sino-Tibetan</strong>: Chinese (Mandarin)</li>
    <li><strong>Japonic</strong>: Japanese</li>
    <li><strong>Afro-Asiatic</strong>: Arabic</li>
</ul>
<p>Languages within the same family often share common roots and features.</p>
"""


def detect_language_code(text: str) -> str:
    """Detect a language from the phrase table, defaulting to English."""
    text = text.strip().lower()
    for translations in PHRASES.values():
        for code, translated in translations.items():
            if text == translated.lower():
                return code
    return "en"


def _language(code: Any, role: str) -> dict[str, str]:
    if code not in LANGUAGES:
        raise ValueError(f"Invalid {role} language code: {code}")
    return LANGUAGES[code]


def _phrase_key(text: str) -> str | None:
    """Find the phrase-table key for text written in any language."""
    for key, translations in PHRASES.items():
        if text in (value.lower() for value in translations.values()):
            return key
    return None


def translate_text(params: dict[str, Any]) -> dict[str, Any]:
    """Translate text into the target language.

    Raises:
        ValueError: On missing parameters or unknown language codes.
    """
    for name in ("text", "target_lang"):
        if name not in params:
            raise ValueError(f"Missing required parameter: {name}")

    text = str(params["text"]).strip().lower()
    target_lang = params["target_lang"]
    source_lang = params.get("source_lang") or detect_language_code(text)

    target = _language(target_lang, "target")
    source = _language(source_lang, "source")

    key = _phrase_key(text)
    if key is not None:
        translated = PHRASES[key][target_lang]
    else:
        translated = f"[{text} (translated from {source['name']} to {target['name']})]"

    return create_tool_response(
        [
            create_json_content(
                {
                    "original": {
                        "text": text,
                        "language": {"code": source_lang, "name": source["name"]},
                    },
                    "translated": {
                        "text": translated,
                        "language": {"code": target_lang, "name": target["name"]},
                    },
                    "timestamp": datetime.now().isoformat(),
                }
            ),
            create_text_content(
                "Translated text:\n"
                f"- Original ({source['name']}): {text}\n"
                f"- Translated ({target['name']}): {translated}"
            ),
            create_html_content(
                '<div class="translation">'
                f'<div class="original"><span class="language">{source["name"]}:</span> '
                f'<span class="text">{text}</span></div>'
                f'<div class="translated"><span class="language">{target["name"]}:</span> '
                f'<span class="text">{translated}</span></div>'
                "</div>"
            ),
        ]
    )


def detect_language(params: dict[str, Any]) -> dict[str, Any]:
    """Detect the language of a text.

    Raises:
        ValueError: If text is missing.
    """
    if "text" not in params:
        raise ValueError("Missing required parameter: text")

    text = str(params["text"]).strip().lower()
    code = detect_language_code(text)
    name = LANGUAGES[code]["name"]

    return create_tool_response(
        [
            create_json_content(
                {
                    "text": text,
                    "detected_language": {
                        "code": code,
                        "name": name,
                        "confidence": DETECTION_CONFIDENCE,
                    },
                }
            ),
            create_text_content(
                "Language Detection Results:\n"
                f"- Text: {text}\n"
                f"- Detected Language: {name} ({code})\n"
                f"- Confidence: {DETECTION_CONFIDENCE * 100:g}%"
            ),
        ]
    )


def get_language_info(params: dict[str, Any]) -> dict[str, Any]:
    """Describe one of the supported languages.

    Raises:
        ValueError: If lang_code is missing or unknown.
    """
    if "lang_code" not in params:
        raise ValueError("Missing required parameter: lang_code")

    code = params["lang_code"]
    if code not in LANGUAGES:
        raise ValueError(f"Invalid language code: {code}")
    language = LANGUAGES[code]

    details = [
        ("Language Family", language["family"]),
        ("Writing System", language["script"]),
        ("Number of Speakers", language["speakers"]),
        ("Hello", language["hello"]),
    ]
    text_lines = [f"Language Information: {language['name']} ({code})"]
    text_lines += [f"- {label}: {value}" for label, value in details]
    html_items = "".join(f"<li><strong>{label}:</strong> {value}</li>" for label, value in details)

    return create_tool_response(
        [
            create_json_content({"code": code, **language}),
            create_text_content("\n".join(text_lines)),
            create_html_content(
                f'<div class="language-info"><h2>{language["name"]} ({code})</h2>'
                f"<ul>{html_items}</ul></div>"
            ),
        ]
    )


def _schema(properties: dict[str, str], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            name: {"type": "string", "description": description}
            for name, description in properties.items()
        },
        "required": required,
    }


class TranslatePlugin(PluginBase):
    """Plugin providing translate_text, detect_language and get_language_info."""

    @property
    def name(self) -> str:
        return "translate"

    @property
    def version(self) -> str:
        return "0.1.0"

    def get_tools(self) -> list[ToolDefinition]:
        return [
            ToolDefinition(
                name="translate_text",
                description="Translate text from one language to another",
                handler=translate_text,
                parameters=_schema(
                    {
                        "text": "Text to translate",
                        "source_lang": "Source language code (e.g., 'en', 'es', 'fr')",
                        "target_lang": "Target language code (e.g., 'en', 'es', 'fr')",
                    },
                    ["text", "target_lang"],
                ),
            ),
            ToolDefinition(
                name="detect_language",
                description="Detect the language of a text",
                handler=detect_language,
                parameters=_schema({"text": "Text to analyze"}, ["text"]),
            ),
            ToolDefinition(
                name="get_language_info",
                description="Get information about a language",
                handler=get_language_info,
                parameters=_schema(
                    {"lang_code": "Language code (e.g., 'en', 'es', 'fr')"}, ["lang_code"]
                ),
            ),
        ]

    def get_prompts(self) -> dict[str, Any]:
        return {"translation_help": {"type": "text", "text": TRANSLATION_HELP}}

    def get_resources(self) -> dict[str, Any]:
        return {
            "language_codes": {
                "type": "json",
                "json": {
                    "languages": [
                        {"code": code, "name": info["name"].split(" (")[0]}
                        for code, info in LANGUAGES.items()
                    ]
                },
            },
            "language_families": {"type": "html", "html": LANGUAGE_FAMILIES_HTML},
        }
