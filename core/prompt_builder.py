"""Instruction text sent to Gemini alongside the photographs."""

from typing import Optional

from core.utils import FlowMode, PatientContext

CANDIDATE_CONDITIONS = (
    "acné",
    "dermatitis",
    "psoriasis",
    "eczema",
    "herpes zoster",
    "melanoma",
    "rosácea",
    "vitiligo",
)

NOT_IDENTIFIED_LABEL = "condición no identificada"

# Field order and labels of the patient context block.
CONTEXT_LABELS = (
    ("affected_area", "Zona del cuerpo afectada"),
    ("medical_history", "Antecedentes médicos relevantes"),
    ("symptoms", "Síntomas asociados"),
    ("duration", "Tiempo de evolución"),
    ("external_factors", "Factores externos"),
)


def _header(mode: FlowMode) -> str:
    if mode is FlowMode.MULTI:
        return (
            "Analiza las siguientes imágenes de piel y proporciona "
            "un diagnóstico dermatológico."
        )
    return "Analiza esta imagen de piel y proporciona un diagnóstico dermatológico."


def _context_block(context: Optional[PatientContext]) -> str:
    context = context or PatientContext()
    lines = ["Datos adicionales del paciente:"]
    for name, label in CONTEXT_LABELS:
        lines.append(f"- {label}: {getattr(context, name)}")
    return "\n".join(lines)


def _instructions(mode: FlowMode) -> str:
    subject = "las imágenes" if mode is FlowMode.MULTI else "la imagen"
    basis = (
        "las características visuales y los datos proporcionados"
        if mode is FlowMode.MULTI
        else "las características visuales"
    )
    candidates = ", ".join(CANDIDATE_CONDITIONS)
    return "\n".join([
        "Instrucciones específicas:",
        f"1. Examina cuidadosamente {subject} en busca de lesiones, erupciones, "
        "cambios de color, textura o cualquier anomalía visible",
        f"2. Identifica la condición dermatológica más probable basándose en {basis}",
        "3. Responde ÚNICAMENTE con el nombre de la condición en español, en minúsculas",
        "4. Si detectas múltiples condiciones, menciona la más prominente",
        f"5. Condiciones comunes a considerar: {candidates}",
        "6. Si no puedes identificar claramente una condición, "
        f"responde \"{NOT_IDENTIFIED_LABEL}\"",
    ])


def build_prompt(mode: FlowMode, context: Optional[PatientContext] = None) -> str:
    """Compose the instruction string for one analysis request.

    In multi-photo mode the five patient context fields are always
    included as labeled lines, even when empty. User text is embedded
    as typed.
    """
    sections = [_header(mode)]
    if mode is FlowMode.MULTI:
        sections.append(_context_block(context))
    sections.append(_instructions(mode))
    sections.append(
        "Importante: Tu respuesta debe ser solo el nombre de la condición "
        "dermatológica, sin explicaciones adicionales."
    )
    return "\n\n".join(sections)
