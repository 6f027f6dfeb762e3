# Mediator HTTP host
# FastAPI adapter around the mediator core
