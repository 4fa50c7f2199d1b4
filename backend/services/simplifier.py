import base64
import binascii
import json
import logging
from typing import Callable

from google.oauth2 import service_account
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from backend.app.config import (
    GENERATIVE_LANGUAGE_SCOPE,
    get_credentials_base64,
    get_gemini_model,
)
from backend.models.schemas import SimplificationResult
from backend.services.response_parser import parse_ai_response

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]

NO_USABLE_TEXT = "Gemini API returned no usable text"

template = """Summarize this government policy in plain English. Then list 3 pros and 3 cons.

Policy text: {text}

Format:
SUMMARY: [Plain English summary here]
PROS:
1. [First pro]
2. [Second pro]
3. [Third pro]
CONS:
1. [First con]
2. [Second con]
3. [Third con]"""

prompt = PromptTemplate.from_template(template)


class ConfigurationError(RuntimeError):
    """Credentials for the generation API are missing or malformed."""


class GenerationError(RuntimeError):
    """The generation API call failed."""


def build_prompt(text: str) -> str:
    return prompt.format(text=text)


def load_credentials() -> service_account.Credentials:
    """
    Build service-account credentials from GOOGLE_CREDENTIALS_BASE64.

    The variable holds the service-account JSON key, base64 encoded.
    """
    encoded = get_credentials_base64()
    if not encoded:
        raise ConfigurationError("Missing GOOGLE_CREDENTIALS_BASE64 environment variable")

    try:
        info = json.loads(base64.b64decode(encoded).decode("utf-8"))
        return service_account.Credentials.from_service_account_info(
            info, scopes=[GENERATIVE_LANGUAGE_SCOPE]
        )
    except (binascii.Error, UnicodeDecodeError, ValueError, KeyError) as e:
        raise ConfigurationError("GOOGLE_CREDENTIALS_BASE64 is not a valid service-account key") from e


def gemini_generate(prompt_text: str) -> str:
    """Send one prompt to Gemini and return the first candidate's text."""
    credentials = load_credentials()
    model = get_gemini_model()

    llm = ChatGoogleGenerativeAI(
        model=model,
        credentials=credentials,
    )

    try:
        response = (llm | StrOutputParser()).invoke(prompt_text)
    except Exception as e:
        raise GenerationError(f"Gemini request to {model} failed") from e

    return response or NO_USABLE_TEXT


def get_text_generator() -> TextGenerator:
    return gemini_generate


def simplify_policy(text: str, generate: TextGenerator) -> SimplificationResult:
    """Generate a plain-English summary with pros and cons for a policy text."""
    output_text = generate(build_prompt(text))
    logger.debug("Model reply: %.200s", output_text)
    return parse_ai_response(output_text)
