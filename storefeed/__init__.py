"""H&M catalogue scraping, product model, translation, image hosting and Telegram helpers."""

__version__ = "0.1.0"