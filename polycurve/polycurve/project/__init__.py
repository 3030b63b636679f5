from .serializer import list_curves, load_curve, save_curve  # noqa: F401
