"""Caller-side services built on top of the store.

Modules are imported directly (``from pulseboard.services.blog import
BlogService``) because :mod:`pulseboard.store` itself depends on
:mod:`pulseboard.services.analytics`:

* ``analytics`` - deterministic dashboard series, rankings and totals.
* ``auth`` - login/signup form validation and session handling.
* ``blog`` - post, like and comment workflows with input validation.
* ``bookmarks`` - per-article bookmark toggling.
* ``autosave`` / ``editor`` - debounced draft persistence for the editor.
* ``news`` - HTTP news client, local filtering and the incremental loader.
* ``narration`` - single-utterance speech queue.
"""
