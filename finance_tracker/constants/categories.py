from finance_tracker.models.category import CategoryType

# Categorías con las que arranca todo usuario nuevo
DEFAULT_CATEGORIES = [
    ("Salario", CategoryType.income),
    ("Consultoría", CategoryType.income),
    ("Arriendo", CategoryType.expense),
    ("Mercado", CategoryType.expense),
    ("Servicios", CategoryType.expense),
    ("Transporte", CategoryType.expense),
]
