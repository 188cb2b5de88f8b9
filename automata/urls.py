from django.urls import path
from . import views

urlpatterns = [
    # Replay construction calls and return the automaton
    path('api/build/', views.build_automaton, name='build_automaton'),

    # Simulation, DFA or NFA depending on the definition's type
    path('api/simulate/', views.simulate, name='simulate'),
    path('api/simulate-steps/', views.simulate_steps, name='simulate_steps'),
    path('api/simulate-stream/', views.simulate_stream, name='simulate_stream'),

    # NFA helper
    path('api/epsilon-closure/', views.epsilon_closure, name='epsilon_closure'),
]
