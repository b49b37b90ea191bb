"""
Device catalogs: phone models and the components fitted to them.

``coefficient`` scales a service's base price for the model. COMPONENTS is
the full (component kind x phone model) grid, joined to other catalogs by
name.
"""

PHONE_MODELS = [
    {
        "name": "IPhone 13",
        "description": (
            "A dramatically more powerful camera system. A display so responsive, "
            "every interaction feels new again. The world's fastest smartphone chip. "
            "Exceptional durability. And a huge leap in battery life. Let's Pro."
        ),
        "manufacturer": "Apple",
        "coefficient": 1.45,
    },
    {"name": "IPhone 13 Pro", "description": None, "manufacturer": "Apple", "coefficient": 1.5},
    {"name": "IPhone XR", "description": None, "manufacturer": "Apple", "coefficient": 1.25},
    {
        "name": "Galaxy S21 FE Pro",
        "description": (
            "Get more out of the activities you heart most with Galaxy S21 FE 5G. "
            "We took all your favorites and built the ultimate fan-inspired phone "
            "jam-packed with features to fuel your passions. "
            "Whether you're a gaming guru or social media star, this crowd pleaser has "
            "the style, power and pro-grade camera to unleash epic in the everyday."
        ),
        "manufacturer": "Samsung",
        "coefficient": 1.3,
    },
    {"name": "Galaxy S22 Ultra", "description": None, "manufacturer": "Samsung", "coefficient": 1.3},
    {"name": "Galaxy S22+", "description": None, "manufacturer": "Samsung", "coefficient": 1.25},
]

_COMPONENT_KIND_NAMES = ["Battery", "Screen Display", "RAM", "Memory", "Screen Glass"]

# Apple parts are produced by FoxCon, Samsung makes its own
_PART_MAKERS = {"Apple": "FoxCon", "Samsung": "Samsung"}

COMPONENTS = [
    {
        "name": f"{model['name']} {kind}",
        "kind": kind,
        "phone_model": model["name"],
        "manufacturer": _PART_MAKERS[model["manufacturer"]],
    }
    for model in PHONE_MODELS
    for kind in _COMPONENT_KIND_NAMES
]
