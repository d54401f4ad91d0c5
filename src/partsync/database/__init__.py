from .inserters.prices import upload_all, upload_category

__all__ = ['upload_all', 'upload_category']
