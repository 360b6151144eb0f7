"""Textual host: TextArea buffer adapter, key translation and demo app."""
