"""
Curated reference exemplars for the two classification axes.

Equipment exemplars describe the plant equipment families the facility
tracks; modification-type exemplars describe each MT design category.
"""

from components.base import KeywordPattern, Rule, first_match
from components.intake.models import DesignType
from components.semantic.models import EQUIPMENT_AXIS, MODIFICATION_TYPE_AXIS, ReferenceExemplar

GENERAL_EQUIPMENT = "General Equipment"

TECHNICAL_CATEGORY_RULES = (
    Rule(KeywordPattern.any_of("pump", "rcp"), "Mechanical Equipment"),
    Rule(KeywordPattern.any_of("generator", "edg"), "Electrical Equipment"),
    Rule(KeywordPattern.any_of("valve", "isolation"), "Flow Control"),
    Rule(KeywordPattern.any_of("transmitter", "sensor"), "Instrumentation"),
)


def technical_category(label: str) -> str:
    """Technical category of an equipment label."""
    return first_match(TECHNICAL_CATEGORY_RULES, label, default=GENERAL_EQUIPMENT)


def _equipment(label: str, text: str) -> ReferenceExemplar:
    return ReferenceExemplar(
        axis=EQUIPMENT_AXIS, label=label, category=technical_category(label), text=text
    )


def _modification(label: str, design_type: DesignType, text: str) -> ReferenceExemplar:
    return ReferenceExemplar(
        axis=MODIFICATION_TYPE_AXIS, label=label, category=design_type.name, text=text
    )


EQUIPMENT_EXEMPLARS = (
    _equipment(
        "reactor coolant pump, RCP",
        "reactor coolant pump RCP coolant circulation pump reactor pump "
        "primary cooling pump mechanical seal",
    ),
    _equipment(
        "emergency diesel generator, EDG",
        "emergency diesel generator EDG backup generator standby power "
        "diesel engine emergency power",
    ),
    _equipment(
        "containment isolation valve, isolation valve",
        "containment isolation valve isolation valve containment penetration "
        "CIV containment barrier Fisher 6",
    ),
    _equipment(
        "pressure transmitter, pressure sensor",
        "pressure transmitter pressure sensor PT pressure measurement "
        "pressure monitor transducer",
    ),
)

MODIFICATION_TYPE_EXEMPLARS = (
    _modification(
        "new design, first installation",
        DesignType.I,
        "new design first installation never installed new system installation "
        "new equipment design change",
    ),
    _modification(
        "modification, change",
        DesignType.II,
        "modification change alter modify existing system change procedure change "
        "configuration change",
    ),
    _modification(
        "different manufacturer, non-identical",
        DesignType.III,
        "different manufacturer non-identical equivalency different specifications "
        "replacement with different",
    ),
    _modification(
        "temporary, temporary modification",
        DesignType.IV,
        "temporary modification temporary installation limited duration jumper "
        "bypass temporary alteration removed after",
    ),
    _modification(
        "identical, same manufacturer",
        DesignType.V,
        "identical same manufacturer like-for-like exact same same part number "
        "identical replacement same specifications",
    ),
)

DEFAULT_EXEMPLARS = EQUIPMENT_EXEMPLARS + MODIFICATION_TYPE_EXEMPLARS
