# simulations/__init__.py
"""
Monte Carlo drivers for the cycle-lemma balancing experiment.

Run the convergence test via:
    python -m simulations.balance [n] [nsyms] [maxiters] [eps]

Compare uniform vs. biased scrambling via:
    python -m simulations.compare --n ... --nsyms ... --iterations ...
"""
