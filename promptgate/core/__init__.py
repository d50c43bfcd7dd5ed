"""Core selection package.

Architectural role:
    Sits between the API adapters and the completion layer. Chooses one
    backend per request and runs the completion call chain.

Composition:
    - `routing_types`: request value, credential presence and backend variant.
    - `selector`: pure backend selection and the end-to-end call.

Package import is side-effect free.
"""
