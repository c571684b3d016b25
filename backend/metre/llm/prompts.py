"""Prompt template for the quantity-survey summary."""

from __future__ import annotations

import json

SYSTEM_PROMPT = "Tu es un expert en métré et estimation de travaux."

_SUMMARY_TEMPLATE = """Tu es un assistant expert en bâtiment et travaux publics (BTP).
Voici un relevé de métrés réalisé sur un plan :

{report}

Pour chaque calque (Layer), analyse les besoins potentiels.
1. Fais un résumé professionnel des quantités.
2. Suggère des matériaux ou des fournitures typiques nécessaires (ex: litres de peinture pour une surface murale, ml de plinthes pour un périmètre).
3. Si possible, donne une estimation "à la louche" de la complexité.

Réponds en format Markdown, clair et concis, en français."""


def build_summary_prompt(report: list[dict]) -> str:
    return _SUMMARY_TEMPLATE.format(report=json.dumps(report, indent=2, ensure_ascii=False))


def get_all_templates() -> dict[str, str]:
    return {"system": SYSTEM_PROMPT, "summary": _SUMMARY_TEMPLATE}
