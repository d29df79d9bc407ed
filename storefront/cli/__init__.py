from .menu import StorefrontMenu, greeting

__all__ = ['StorefrontMenu', 'greeting']
