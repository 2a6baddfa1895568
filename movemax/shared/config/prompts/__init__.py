"""Prompt templates for the MoveMax AI auditor using Jinja2."""

from movemax.shared.config.prompts.manager import PromptManager, render_prompt, get_prompt_manager

__all__ = ["PromptManager", "render_prompt", "get_prompt_manager"]
