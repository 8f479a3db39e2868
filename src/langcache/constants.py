"""Project-wide named constants.

The fixed inputs of both pipelines live here: the talk and locales the
transcript fetcher covers, and the article titles the Wikipedia fetcher
starts from.
"""

TED_TALK_ID: int = 1880

TED_TRANSCRIPT_URL: str = "https://www.ted.com/talks/{talk_id}/transcript.json"

# Locale codes the TED transcript endpoint accepts for talk 1880, in the
# order the site lists them.
TED_LOCALES: tuple[str, ...] = (
    "id",
    "bs",
    "da",
    "de",
    "en",
    "es",
    "fr",
    "hr",
    "it",
    "sw",
    "lt",
    "hu",
    "nl",
    "nb",
    "pl",
    "pt-br",
    "pt",
    "ro",
    "sq",
    "sk",
    "fi",
    "sv",
    "vi",
    "tr",
    "cs",
    "el",
    "be",
    "mn",
    "ru",
    "sr",
    "uk",
    "bg",
    "mk",
    "hy",
    "he",
    "ar",
    "fa",
    "kmr",
    "ta",
    "th",
    "my",
    "zh-cn",
    "zh-tw",
    "ja",
    "ko",
)

WIKI_BASE_LOCALE: str = "en"

WIKI_API_URL: str = "https://{locale}.wikipedia.org/w/api.php"

# Mostly a selection from Wikipedia's list of articles written in the
# greatest number of languages.
WIKI_TITLES: tuple[str, ...] = (
    "Lorem ipsum",
    "Gravity",
    "Earth",
    "Philosophy",
    "Music",
    "Albert Einstein",
    "Eye",
    "Alphabet",
    "Love",
    "Wikipedia",
    "Language",
)

# Upper bound the MediaWiki API accepts for lllimit.
WIKI_LANGLINKS_LIMIT: int = 500

WIKI_MANIFEST_NAME: str = "lang-links.json"

# Base language subtags whose script is written without spaces between words.
COMPACT_SCRIPT_LANGUAGES: frozenset[str] = frozenset({"zh", "ja"})

TED_SUBDIR: str = "ted-talks"
WIKI_SUBDIR: str = "wikipedia"
