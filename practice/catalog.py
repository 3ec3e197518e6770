"""Catalog - Categorias oferecidas na escolha de preferencias.

Ordem segue o curriculo tipico de PA: ciencias basicas primeiro, depois
as especialidades clinicas.
"""

from __future__ import annotations

from .models.schemas import CategoryInfo

ORDERED_CATEGORIES: tuple[CategoryInfo, ...] = (
    CategoryInfo(
        id="anatomy-physiology",
        name="Anatomy & Physiology",
        description="Basic structure and function of human body systems",
        emoji="🧬",
    ),
    CategoryInfo(
        id="clinical-medicine",
        name="Clinical Medicine",
        description="Fundamentals of clinical practice and patient care",
        emoji="👨‍⚕️",
    ),
    CategoryInfo(
        id="cardiology",
        name="Cardiology",
        description="Diseases and conditions affecting the heart and blood vessels",
        emoji="❤️",
    ),
    CategoryInfo(
        id="pulmonology",
        name="Pulmonology",
        description="Diseases and conditions affecting the respiratory system",
        emoji="🫁",
    ),
    CategoryInfo(
        id="gastroenterology",
        name="Gastroenterology",
        description="Diseases and conditions affecting the digestive system",
        emoji="🔥",
    ),
    CategoryInfo(
        id="endocrinology",
        name="Endocrinology",
        description="Diseases and conditions affecting the endocrine system",
        emoji="⚡",
    ),
    CategoryInfo(
        id="nephrology",
        name="Nephrology",
        description="Diseases and conditions affecting the kidneys",
        emoji="🫘",
    ),
    CategoryInfo(
        id="neurology",
        name="Neurology",
        description="Diseases and conditions affecting the nervous system",
        emoji="🧠",
    ),
    CategoryInfo(
        id="orthopedics",
        name="Orthopedics",
        description="Musculoskeletal conditions and injuries",
        emoji="🦴",
    ),
    CategoryInfo(
        id="infectious-disease",
        name="Infectious Disease",
        description="Diseases caused by pathogenic microorganisms",
        emoji="🦠",
    ),
    CategoryInfo(
        id="emergency-medicine",
        name="Emergency Medicine",
        description="Acute care and emergency conditions",
        emoji="🚑",
    ),
    CategoryInfo(
        id="pediatrics",
        name="Pediatrics",
        description="Care of infants, children, and adolescents",
        emoji="👶",
    ),
    CategoryInfo(
        id="obgyn",
        name="OB/GYN",
        description="Women's health and reproductive medicine",
        emoji="🤰",
    ),
    CategoryInfo(
        id="psychiatry",
        name="Psychiatry",
        description="Mental health conditions and disorders",
        emoji="🧩",
    ),
    CategoryInfo(
        id="dermatology",
        name="Dermatology",
        description="Conditions affecting the skin",
        emoji="🔬",
    ),
)


def list_categories() -> list[CategoryInfo]:
    return list(ORDERED_CATEGORIES)
