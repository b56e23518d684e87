"""
Display labels for days, months and periods.
Weekday tables are indexed with Python's numbering (0=Monday .. 6=Sunday).
"""

DEFAULT_LOCALE = "es"

# Placeholder shown when a metric has nothing to summarise.
NO_DATA = "—"

DAY_ABBREVIATIONS = {
    "es": ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
}

DAY_NAMES = {
    "es": ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}

MONTH_ABBREVIATIONS = {
    "es": ["Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"],
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}

PERIOD_LABELS = {
    "es": {
        "week": "Esta semana",
        "month": "Este mes",
        "three_months": "3 meses",
        "year": "Este año",
    },
    "en": {
        "week": "This week",
        "month": "This month",
        "three_months": "3 months",
        "year": "This year",
    },
}

NO_COMPARISON = {"es": "Sin datos", "en": "No data"}

# Reminder weekday indices stored by the backend run 0=Sunday .. 6=Saturday.
REMINDER_DAY_ABBREVIATIONS = ["Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"]
