from .drops import DropEntry, DropTable

__all__ = ["DropEntry", "DropTable"]
