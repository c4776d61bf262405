from .stock import StockService

__all__ = ['StockService']
