from django.urls import path
from . import views

urlpatterns = [
    # Structural diagnostics for the editor's validation panel
    path('api/validate/', views.validate_automaton, name='validate_automaton'),

    # Full run over an input string, returning the trace and verdict
    path('api/simulate/', views.simulate_automaton, name='simulate_automaton'),

    # Batch of stored test inputs with accepted/rejected counts
    path('api/test-inputs/', views.run_test_inputs, name='run_test_inputs'),

    # Example automata
    path('api/examples/', views.list_examples, name='list_examples'),
    path('api/examples/<str:example_id>/', views.get_example, name='get_example'),
]
