"""Morphology layer: stemming and form generation per language.

Each language module (sk.py, cs.py, nl.py, en.py) provides a build()
factory. They are registered with the dispatch module on import; rule
tables are loaded the first time a language is resolved.
"""

from flexio.morphology import cs, dispatch, en, nl, sk

dispatch.register("cs", cs.build)
dispatch.register("en", en.build)
dispatch.register("nl", nl.build)
dispatch.register("sk", sk.build)
