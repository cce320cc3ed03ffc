"""Static recommendation table keyed by normalized condition label."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from core.utils import RecommendationRecord


class Condition(Enum):
    """Conditions that have a recommendation record.

    Values are the normalized labels the model is asked to reply with.
    """
    ACNE = "acné"
    HERPES_ZOSTER = "herpes zoster"
    DERMATITIS = "dermatitis"
    PSORIASIS = "psoriasis"
    MELANOMA = "melanoma"
    ECZEMA = "eczema"

    @classmethod
    def from_label(cls, label: str) -> Optional["Condition"]:
        """Return the condition for an already-normalized label, or None."""
        try:
            return cls(label)
        except ValueError:
            return None


_RECORDS = {
    Condition.ACNE: RecommendationRecord(
        description="Condición común de la piel caracterizada por poros obstruidos",
        medications=("Peróxido de benzoilo", "Ácido salicílico", "Tretinoína"),
        advice="Mantén la piel limpia, evita tocar las lesiones y usa productos no comedogénicos",
    ),
    Condition.HERPES_ZOSTER: RecommendationRecord(
        description="Infección viral que causa una erupción dolorosa",
        medications=("Aciclovir", "Valaciclovir", "Famciclovir"),
        advice="Consulta inmediatamente con un médico. El tratamiento temprano es crucial.",
    ),
    Condition.DERMATITIS: RecommendationRecord(
        description="Inflamación de la piel que puede ser alérgica o de contacto",
        medications=("Cremas con corticosteroides", "Antihistamínicos", "Emolientes"),
        advice="Identifica y evita los desencadenantes, mantén la piel hidratada",
    ),
    Condition.PSORIASIS: RecommendationRecord(
        description="Enfermedad autoinmune que acelera el ciclo de vida de las células de la piel",
        medications=("Corticosteroides tópicos", "Análogos de vitamina D", "Metotrexato"),
        advice="Evita el estrés, mantén la piel hidratada y considera tratamientos con luz UV",
    ),
    Condition.MELANOMA: RecommendationRecord(
        description="Tipo de cáncer de piel que se desarrolla en los melanocitos",
        medications=("Requiere evaluación médica inmediata",),
        advice="¡URGENTE! Consulta inmediatamente con un dermatólogo oncólogo",
    ),
    Condition.ECZEMA: RecommendationRecord(
        description="Condición que hace que la piel se inflame, pique y se enrojezca",
        medications=("Cremas con corticosteroides", "Inhibidores de calcineurina", "Emolientes"),
        advice="Evita irritantes, usa jabones suaves y mantén la piel bien hidratada",
    ),
}

RECOMMENDATION_TABLE: Mapping[str, RecommendationRecord] = MappingProxyType(
    {condition.value: record for condition, record in _RECORDS.items()}
)

FALLBACK_RECORD = RecommendationRecord(
    description="condition not recognized in our database",
    medications=("consult a dermatologist",),
    advice="professional medical evaluation is recommended for an accurate diagnosis",
)


def get_recommendation(label: str) -> Optional[RecommendationRecord]:
    """Look up the record for a normalized label. Returns None on a miss."""
    condition = Condition.from_label(label)
    if condition is None:
        return None
    return _RECORDS[condition]
