"""
LLM client abstraction for content-writing assistance.

This module provides an interface for calling LLMs (Claude/Anthropic)
to rewrite, proofread, analyze and generate meta tags for content.
Every failure, including unparseable model output, is raised as
LLMClientError.
"""

import json
import os
import re
from typing import Optional

import anthropic
import httpx

from .config import DEFAULT_LLM_MODEL


class LLMClientError(Exception):
    """Raised when LLM operations fail."""
    pass


WRITING_SYSTEM_PROMPT = """You are an expert content writer and SEO editor.

CRITICAL RULES - MUST FOLLOW:
1. Preserve the meaning and every fact of the original content
2. Do not invent facts, statistics, quotes or claims
3. Use the target keywords naturally - avoid keyword stuffing
4. Keep sentences clear and readable, vary sentence length
5. Keep the language of the original content

OUTPUT FORMAT:
- Return ONLY the requested output
- Do NOT include any explanation or commentary"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class LLMClient:
    """
    Client for LLM-based writing assistance.

    Supports Anthropic Claude API.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_LLM_MODEL,
        timeout: float = 60.0,
    ):
        """
        Initialize the LLM client.

        Args:
            api_key: API key for the LLM provider. If None, reads from ANTHROPIC_API_KEY env var.
            model: Model identifier to use.
            timeout: Read timeout in seconds for a single API call.
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model

        if not self.api_key:
            raise LLMClientError(
                "No API key provided. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter."
            )

        try:
            self.client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=httpx.Timeout(timeout, connect=min(timeout, 30.0)),
            )
        except Exception as e:
            raise LLMClientError(f"Failed to initialize Anthropic client: {e}") from e

    def _complete(self, prompt: str, max_tokens: int, action: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=WRITING_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
            return response.content[0].text
        except Exception as e:
            raise LLMClientError(f"{action} failed: {e}") from e

    def rewrite_content(
        self,
        content: str,
        keywords: list[str],
        tone: str = "professional",
        max_tokens: int = 4096,
    ) -> str:
        """
        Rewrite content for SEO in the requested tone.

        Args:
            content: Original content.
            keywords: Keywords the rewrite should feature.
            tone: Target tone of voice.
            max_tokens: Maximum tokens in response.

        Returns:
            The rewritten content as plain text.
        """
        keyword_list = ", ".join(f'"{kw}"' for kw in keywords) or "None"
        prompt = f"""Rewrite the following content so it ranks better in search engines.

Target keywords: {keyword_list}
Target tone: {tone}

Requirements:
- Use each target keyword as a complete phrase, 1-3% keyword density overall
- Keep the structure of the original (paragraph order, headings)
- Prefer short sentences and common words

CONTENT:
{content}

Return ONLY the rewritten content as plain text."""

        text = self._complete(prompt, max_tokens, "Content rewrite").strip()
        if not text:
            raise LLMClientError("Content rewrite failed: empty response")
        return text

    def proofread_content(
        self,
        content: str,
        target_audience: Optional[str] = None,
        max_tokens: int = 4096,
    ) -> dict:
        """
        Proofread content and list the corrections made.

        Args:
            content: Content to proofread.
            target_audience: Optional audience description for word choice.
            max_tokens: Maximum tokens in response.

        Returns:
            Dict with 'correctedContent' (str) and 'errors' (list of dicts
            with 'original', 'correction', 'type' and 'explanation').
        """
        audience = f"\nTarget audience: {target_audience}\n" if target_audience else ""
        prompt = f"""Proofread the following content. Fix spelling, grammar and punctuation only.
{audience}
CONTENT:
{content}

Respond with a single JSON object in this exact shape:
{{"correctedContent": "<full corrected text>",
  "errors": [{{"original": "<text>", "correction": "<text>", "type": "spelling|grammar|punctuation|style", "explanation": "<short reason>"}}]}}"""

        response = self._complete(prompt, max_tokens, "Proofreading")
        return self._parse_proofread_response(response)

    def generate_meta(
        self,
        content: str,
        keyword: str,
        max_title_length: int = 60,
        max_description_length: int = 160,
    ) -> dict:
        """
        Generate an SEO title and meta description.

        Args:
            content: Page content.
            keyword: Primary keyword the meta tags must contain.
            max_title_length: Maximum title length in characters.
            max_description_length: Maximum description length in characters.

        Returns:
            Dict with 'title', 'description', 'slug' and 'keyword' keys.
        """
        prompt = f"""Create SEO meta tags for the page below.

Primary keyword (MUST appear as an exact phrase in title and description): {keyword}
Maximum title length: {max_title_length} characters
Maximum description length: {max_description_length} characters

CONTENT:
{content[:6000]}

Respond in this exact format:
TITLE: <title>
DESCRIPTION: <meta description>
SLUG: <url-slug>"""

        response = self._complete(prompt, 500, "Meta generation")
        meta = self._parse_meta_response(response)
        if not meta["title"] or not meta["description"]:
            raise LLMClientError("Meta generation failed: incomplete response")
        meta["keyword"] = keyword
        return meta

    def analyze_content(self, content: str) -> dict:
        """
        Use LLM to summarize content and judge its tone and intent.

        Returns:
            Dict with 'summary', 'tone', 'intent' and 'suggestions' keys.
        """
        prompt = f"""Analyze this content as an editor:

{content[:6000]}

Provide:
1. A 1-2 sentence summary of what this content is about
2. The tone of voice (one word)
3. The primary intent: "informational", "transactional" or "navigational"
4. Up to 3 concrete suggestions to improve it

Respond in this exact format:
SUMMARY: <your summary>
TONE: <tone>
INTENT: <intent>
SUGGESTIONS: <suggestion>; <suggestion>; <suggestion>"""

        response = self._complete(prompt, 500, "Content analysis")
        return self._parse_analysis_response(response)

    def _parse_proofread_response(self, response: str) -> dict:
        """Parse the JSON proofreading response."""
        cleaned = _CODE_FENCE.sub("", response.strip())
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise LLMClientError(f"Proofreading failed: invalid JSON response ({e})") from e

        if not isinstance(data, dict) or not isinstance(data.get("correctedContent"), str):
            raise LLMClientError("Proofreading failed: response missing correctedContent")

        errors = data.get("errors") or []
        if not isinstance(errors, list):
            raise LLMClientError("Proofreading failed: errors must be a list")

        return {
            "correctedContent": data["correctedContent"],
            "errors": [e for e in errors if isinstance(e, dict)],
        }

    def _parse_meta_response(self, response: str) -> dict:
        """Parse meta tag response."""
        result = {"title": "", "description": "", "slug": ""}

        for line in response.strip().split("\n"):
            line = line.strip()
            if line.startswith("TITLE:"):
                result["title"] = line[6:].strip()
            elif line.startswith("DESCRIPTION:"):
                result["description"] = line[12:].strip()
            elif line.startswith("SLUG:"):
                result["slug"] = line[5:].strip().strip("/")

        return result

    def _parse_analysis_response(self, response: str) -> dict:
        """Parse content analysis response."""
        result = {
            "summary": "",
            "tone": "",
            "intent": "informational",
            "suggestions": [],
        }

        for line in response.strip().split("\n"):
            line = line.strip()
            if line.startswith("SUMMARY:"):
                result["summary"] = line[8:].strip()
            elif line.startswith("TONE:"):
                result["tone"] = line[5:].strip().lower()
            elif line.startswith("INTENT:"):
                intent = line[7:].strip().lower()
                if intent in ("informational", "transactional", "navigational"):
                    result["intent"] = intent
            elif line.startswith("SUGGESTIONS:"):
                suggestions = line[12:].strip()
                result["suggestions"] = [s.strip() for s in suggestions.split(";") if s.strip()]

        return result


def create_llm_client(
    api_key: Optional[str] = None,
    model: str = DEFAULT_LLM_MODEL,
    timeout: float = 60.0,
) -> LLMClient:
    """
    Factory function to create an LLM client.

    Args:
        api_key: Optional API key. If None, uses environment variable.
        model: Model to use.
        timeout: Read timeout in seconds.

    Returns:
        Configured LLMClient instance.
    """
    return LLMClient(api_key=api_key, model=model, timeout=timeout)
