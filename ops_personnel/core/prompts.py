"""
AI prompt templates, kept apart from the service code that fills them.
"""

# --- PERFORMANCE INSIGHT ---
INSIGHT_SYSTEM = (
    "You are an experienced HR consultant for an airport ground handling company. "
    "You write short, factual, professional assessments for line managers."
)

INSIGHT_USER_TEMPLATE = (
    "Analyze this ground staff member's performance data:\n\n"
    "{bundle_json}\n\n"
    "Respond with:\n"
    "1. A two-sentence performance summary.\n"
    "2. One specific area for improvement.\n"
    "3. A retention risk assessment: Low, Medium or High, with one sentence of reasoning.\n"
    "Keep the whole answer under 150 words."
)


def get_prompt(template: str, **kwargs) -> str:
    return template.format(**kwargs)
