from listing_app.models.reviews import Review

__all__ = ["Review"]
