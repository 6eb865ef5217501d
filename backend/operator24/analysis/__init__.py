"""Video upload endpoints and the pipelines behind them."""
