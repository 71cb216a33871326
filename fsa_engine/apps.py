from django.apps import AppConfig


class FsaEngineConfig(AppConfig):
    name = 'fsa_engine'
    verbose_name = 'Finite automaton engine'
