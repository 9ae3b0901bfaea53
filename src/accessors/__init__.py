"""Typed property accessors.

This package maps typed values onto raw store entries. It holds the
coercion rules, the four accessor variants, the reset/remove capability
and the descriptors used to declare stored properties on a class.
"""
