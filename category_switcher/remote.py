"""Remote application categorization through an OpenAI-compatible API."""

from typing import Optional
import openai
from .categories import Category
from .config import Config
from .exceptions import (
    ClassifierConnectionError,
    ClassifierNotConfiguredError,
    ClassifierParseError,
)


def build_prompt(name: str, identifier: str) -> str:
    """
    Build the classification prompt for one application.

    Args:
        name: Display name of the application
        identifier: Bundle identifier of the application

    Returns:
        Prompt string
    """
    return "\n".join([
        "Categorize this macOS app into exactly one of these categories: "
        + ", ".join(Category.labels()),
        f"App Name: {name}",
        f"Bundle ID: {identifier}",
        "",
        "Respond with ONLY the category name, nothing else.",
    ])


class RemoteClassifier:
    """Asks a language model which category an application belongs to."""

    def __init__(self, config: Config, client=None):
        """
        Initialize the remote classifier.

        Args:
            config: Switcher configuration (endpoint, model, key, timeout)
            client: OpenAI-style client (built from config if not provided)
        """
        self.model = config.llm_model
        self.temperature = config.llm_temperature
        self.timeout = config.llm_timeout
        self.configured = config.remote_configured or client is not None

        if client is None and self.configured:
            client = openai.OpenAI(
                base_url=config.llm_endpoint,
                api_key=config.llm_api_key or "not-needed",  # Local endpoints don't require real API keys
                timeout=self.timeout,
                max_retries=0,
            )
        self.client = client

    def classify(self, name: str, identifier: str) -> Category:
        """
        Classify one application with a single remote call.

        Args:
            name: Display name of the application
            identifier: Bundle identifier of the application

        Returns:
            The category named by the response

        Raises:
            ClassifierNotConfiguredError: No endpoint or key is configured
            ClassifierConnectionError: Transport failure or timeout
            ClassifierParseError: Response is not exactly one category label
        """
        if not self.configured or self.client is None:
            raise ClassifierNotConfiguredError("No classification endpoint configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": build_prompt(name, identifier)
                    }
                ],
                temperature=self.temperature,
                timeout=self.timeout,
            )
        except openai.APITimeoutError as e:
            raise ClassifierConnectionError(f"Classification of '{identifier}' timed out") from e
        except Exception as e:
            raise ClassifierConnectionError(f"Classification request for '{identifier}' failed: {e}") from e

        content = self._extract_content(response)
        category = Category.from_label(content)
        if category is None:
            raise ClassifierParseError(
                f"Unrecognized category {content!r} for '{identifier}'"
            )
        return category

    @staticmethod
    def _extract_content(response) -> Optional[str]:
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            return None
        return content if isinstance(content, str) else None
