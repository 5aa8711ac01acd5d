#!/usr/bin/env python3
"""
Template Engine - Prompt template loading and rendering
"""

import re
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

ADVICE_TEMPLATE = "advice/gear_advice"

# Built-in prompts, used when the templates directory does not override them
DEFAULT_TEMPLATES: Dict[str, str] = {
    "base/system_prompts/coach.txt":
        "You are an expert cycling coach. You give short, specific advice about gear choice,\n"
        "cadence and effort for road cyclists. Answer only with the requested structure.",

    "advice/sections/status.txt":
        "Current Status:\n"
        "- Front Chainring: {front_teeth}T\n"
        "- Rear Cog: {rear_teeth}T\n"
        "- Cadence: {cadence_rpm} RPM\n"
        "- Speed: {speed_kmh} km/h\n"
        "- Gradient (Slope): {gradient_percent}%\n"
        "- Wind: {wind_description}\n"
        "- Est. Power Output: {power_watts} Watts\n"
        "- Total System Weight: {total_mass_kg} kg",

    "advice/sections/questions.txt":
        "Analyze this specific gear combination and riding scenario.\n"
        "1. Is this efficiently geared for the current gradient, wind, and power?\n"
        "2. Am I likely cross-chaining?\n"
        "3. Provide a specific cycling tip based on the power-to-weight effort and environmental resistance.",

    "advice/gear_advice.txt":
        "I am riding a road bike with a {drivetrain} setup.\n"
        "{status_section}\n\n"
        "{if gear_warning}The calculator flags this gear as: {gear_label}.\n\n{endif}"
        "{questions_section}\n\n"
        "Reply with a short piece of advice (max 2 sentences) and one category out of: {categories}.",
}


class TemplateEngine:
    """Simple template engine for prompt management"""

    def __init__(self, templates_dir: Optional[str] = None):
        self.templates_dir = Path(templates_dir) if templates_dir else None

    def _normalize_name(self, template_name: str) -> str:
        return template_name if template_name.endswith('.txt') else f"{template_name}.txt"

    def _resolve_template_path(self, template_name: str) -> Optional[Path]:
        """Resolve template name to full path"""
        if not self.templates_dir:
            return None
        return self.templates_dir / self._normalize_name(template_name)

    def load_template(self, template_name: str) -> str:
        """Load raw template content, preferring the templates directory"""
        name = self._normalize_name(template_name)
        template_path = self._resolve_template_path(name)

        if template_path is not None and template_path.exists():
            with open(template_path, 'r', encoding='utf-8') as f:
                content = f.read()
            logger.debug(f"Loaded template from disk: {name}")
            return content

        if name in DEFAULT_TEMPLATES:
            return DEFAULT_TEMPLATES[name]

        raise FileNotFoundError(f"Template not found: {template_name}")

    def render(self, template_name: str, **kwargs) -> str:
        """Load and render template with variables, supporting includes and conditionals"""
        content = self.load_template(template_name)

        flat_context = self._flatten_context(kwargs)

        content = self._process_includes(content, **flat_context)
        content = self._process_conditionals(content, **flat_context)

        try:
            rendered = content.format(**flat_context)
            logger.debug(f"Rendered template: {template_name}")
            return rendered

        except KeyError as e:
            logger.error(f"Missing variable in template {template_name}: {e}")
            logger.debug(f"Available variables: {list(flat_context.keys())}")
            raise ValueError(f"Missing variable in template {template_name}: {e}")

    def _flatten_context(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Flatten nested context with safe access and None handling"""
        flat = {}

        def flatten_item(key_path: str, value: Any):
            if value is None:
                flat[key_path] = "N/A"
            elif isinstance(value, dict):
                for subkey, subvalue in value.items():
                    new_path = f"{key_path}_{subkey}" if key_path else subkey
                    flatten_item(new_path, subvalue)
            else:
                flat[key_path] = str(value)

        for key, value in context.items():
            flatten_item(key, value)

        return flat

    def _process_conditionals(self, content: str, **context) -> str:
        """Process {if condition}content{endif} blocks"""
        conditional_pattern = re.compile(r'\{if\s+(\w+)\}(.*?)\{endif\}', re.DOTALL)

        def replace(match: re.Match) -> str:
            value = context.get(match.group(1), "")
            if str(value).lower() in ('true', 'yes', '1'):
                return match.group(2)
            return ""

        return conditional_pattern.sub(replace, content)

    def _process_includes(self, content: str, **kwargs) -> str:
        """Process section includes like {status_section}"""
        section_mappings = {
            'status_section': 'advice/sections/status.txt',
            'questions_section': 'advice/sections/questions.txt',
        }

        section_pattern = re.compile(r'\{(\w+_section)\}')

        for match in section_pattern.finditer(content):
            placeholder = match.group(0)
            section_name = match.group(1)

            if section_name in section_mappings:
                section_rendered = self.render(section_mappings[section_name], **kwargs)
                # Escape braces so the outer format pass leaves the section intact
                section_rendered = section_rendered.replace('{', '{{').replace('}', '}}')
                content = content.replace(placeholder, section_rendered)

        return content

    def create_template(self, template_name: str, content: str) -> None:
        """Create a new template file"""
        template_path = self._resolve_template_path(template_name)
        if template_path is None:
            raise ValueError("No templates directory configured")
        template_path.parent.mkdir(parents=True, exist_ok=True)

        with open(template_path, 'w', encoding='utf-8') as f:
            f.write(content)

        logger.info(f"Created template: {template_name}")

# Utility functions for template management
def create_default_templates(templates_dir: str) -> None:
    """Write the built-in templates to disk so they can be edited"""
    engine = TemplateEngine(templates_dir)

    for template_name, content in DEFAULT_TEMPLATES.items():
        path = engine._resolve_template_path(template_name)
        if not path.exists():
            engine.create_template(template_name, content)
