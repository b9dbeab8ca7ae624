"""Prompt templates for LLM calls."""

from learnme.prompts.registry import clear_cache, get_prompt, list_prompts

__all__ = ["clear_cache", "get_prompt", "list_prompts"]
