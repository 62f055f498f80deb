"""Routing — named route templates and URL generation.

Results never match incoming paths; they only turn a route name and
route values back into a URL through a ``UrlResolver``.
"""
