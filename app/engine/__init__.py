from app.engine.evaluator import DeclarationEvaluator, DeclarationReport
from app.engine.extension import ExtensionModel
from app.engine.chase import ChaseModel

__all__ = ["DeclarationEvaluator", "DeclarationReport", "ExtensionModel", "ChaseModel"]
