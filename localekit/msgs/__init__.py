"""Default namespace for translation catalog modules.

Applications ship catalogs as ``<package>.messages_<locale>`` modules and
point I18N_TRANSLATION_PACKAGE at their package. This package holds none,
so every locale resolves to the empty catalog until that is configured.
"""
