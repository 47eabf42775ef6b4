from __future__ import annotations

DEFAULT_BRAND_NAME = "ANA SHARIF"

DESIGN_RULES = (
    "Vector art style",
    "Remove dome/mosque background",
    "Add Smart Business/AI symbols",
    "Use reference font for the brand name",
    "English text only (No Persian)",
)


def build_redesign_prompt(brand_name: str = DEFAULT_BRAND_NAME) -> str:
    # Senior-designer brief; the second image (if sent) is the typography reference
    name = (brand_name or "").strip()
    if not name:
        raise ValueError("brand_name must not be blank")
    return (
        "Act as a professional senior logo designer. "
        f"Redesign the provided logo for a Business Development Institute named \"{name}\".\n\n"
        "STRICT REQUIREMENTS:\n"
        "1. STYLE: Create a clean, modern VECTOR art style logo. Flat design, high geometric precision.\n"
        "2. COMPOSITION: Completely REMOVE the dome/mosque background from the original image.\n"
        "3. SYMBOLISM: Create a new symbol that represents \"Business Development\" and \"Smart Intelligence\" (AI). "
        "Use abstract concepts like connecting nodes, upward growth charts, stylized brain circuitry, or a hexagon grid.\n"
        "4. CONCEPT: The design must be conceptual, unique, and memorable. Avoid clichés like standard lightbulbs "
        "or generic gears. It should look like a premium tech-business consultancy brand.\n"
        f"5. TEXT: The text must read \"{name}\".\n"
        "6. TYPOGRAPHY: STRICTLY mimic the font style, weight, and serifs of the text in the second provided image.\n"
        "7. LANGUAGE: ENGLISH ONLY. Do not use any Persian/Arabic script.\n\n"
        "Output a high-quality, professional logo on a white background."
    )
