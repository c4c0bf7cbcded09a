"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

VISIBILITY_BUFFER_MINUTES = 20
LATE_THRESHOLD_MINUTES = 5
ABSENT_THRESHOLD_MINUTES = 15
AUTO_TAG_INTERVAL_SECONDS = 60

MINUTES_PER_DAY = 24 * 60

SHIFT_IN_LABEL = "ENTRADA"
SHIFT_OUT_LABEL = "SALIDA"
LATE_LABEL = "RETARDO"
ABSENT_LABEL = "FALTA"

# Nominal break lengths (minutes) shown next to an open break.
BREAK_DURATION_HINTS = {
    "desayuno": 15,
    "cafe": 10,
    "almuerzo": 60,
    "cena": 45,
    "almuerzo_cena": 60,
    "desayuno_cafe": 15,
}

BREAK_LABELS = {
    "almuerzo_cena": "Almuerzo/Cena",
    "desayuno_cafe": "Desayuno/Café",
}

STATE_COLLECTIONS = ("employees", "positions", "assignments", "turns", "schedules", "marks", "reports")
