"""Tool catalog and generic dispatch.

Import from the submodules directly: ``decoding.normalizer`` depends on
``tools.method_spec``, so this package does not re-export anything.
"""
