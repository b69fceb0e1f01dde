"""Example usage of the dtmcflow package.

This example demonstrates the core features of the dtmcflow package including:
- Classifying the states of a chain and putting it in canonical form
- Stationary distributions and hitting probabilities
- First-passage times and expected rewards
- Scoring transition data under Dirichlet priors
- Using the AnalysisContext context manager
"""

import numpy as np

from dtmcflow import (
    AnalysisContext,
    LabeledMatrix,
    MarkovChain,
    predictive_distribution,
)


GAME = MarkovChain(
    ["Start", "Hot", "Cold", "Risky", "Broke"],
    [
        [0.2, 0.3, 0.0, 0.5, 0.0],
        [0.0, 0.5, 0.5, 0.0, 0.0],
        [0.0, 0.7, 0.3, 0.0, 0.0],
        [0.4, 0.0, 0.0, 0.0, 0.6],
        [0.0, 0.0, 0.0, 0.0, 1.0],
    ],
    name="game",
)


def structure_example():
    """Demonstrate state classification."""
    print("=" * 60)
    print("Class Structure Example")
    print("=" * 60)

    print(f"\n   Communicating classes: {GAME.communicating_classes()}")
    print(f"   Recurrent classes: {GAME.recurrent_classes()}")
    print(f"   Transient states: {GAME.transient_states()}")
    print(f"   Irreducible: {GAME.is_irreducible()}")

    canonical = GAME.canonic_form()
    print(f"\n   Canonical order: {canonical.states}")
    print(f"   Canonical matrix:\n{canonical.transition_matrix}")

    flip = MarkovChain(["Heads", "Tails"], [[0.0, 1.0], [1.0, 0.0]])
    print(f"\n   Period of the flip chain: {flip.period()}")


def probabilities_example():
    """Demonstrate stationary and hitting probabilities."""
    print("\n" + "=" * 60)
    print("Long-run Behaviour Example")
    print("=" * 60)

    print("\n1. Stationary distributions (one row per recurrent class)")
    for row in GAME.steady_states():
        print(f"   {np.round(row, 4)}")

    print("\n2. Probability of ever reaching 'Broke'")
    h = GAME.hitting_probabilities()
    broke = GAME.states.index("Broke")
    for i, state in enumerate(GAME.states):
        print(f"   from {state:<6}: {h[i, broke]:.3f}")


def passage_example():
    """Demonstrate first-passage and reward computations."""
    print("\n" + "=" * 60)
    print("First Passage and Rewards Example")
    print("=" * 60)

    weather = MarkovChain(["Sunny", "Rainy"], [[0.8, 0.2], [0.4, 0.6]])
    H = weather.first_passage("Sunny", 5)
    print("\n1. First rain after a sunny day, by step:")
    print(f"   {np.round(H[:, 1], 4)}")

    print("\n2. Expected sunny days over the next week:")
    print(f"   {weather.expected_rewards(6, [1.0, 0.0])}")

    print("\n3. Expected rounds played before going broke (10 rounds):")
    rewards = [1.0, 1.0, 1.0, 1.0, 0.0]
    played = GAME.expected_rewards_before_hitting("Start", rewards, 10, avoid=["Broke"])
    print(f"   {played:.3f}")


def bayesian_example():
    """Demonstrate the Dirichlet prior and predictive probabilities."""
    print("\n" + "=" * 60)
    print("Bayesian Inference Example")
    print("=" * 60)

    sequence = list("abaaaabababaabbba")
    hyper = LabeledMatrix([[1.0, 1.0], [2.0, 4.0]], ["a", "b"])
    log_p = predictive_distribution(sequence[:10], sequence[10:], hyper)
    print(f"\n   log P(new | old) = {log_p:.4f}")

    chain = MarkovChain(["a", "b"], [[0.5, 0.5], [0.3, 0.7]])
    print(f"   Log prior per row: {chain.prior_distribution(hyper)}")


def context_manager_example():
    """Demonstrate the AnalysisContext context manager."""
    print("\n" + "=" * 60)
    print("AnalysisContext Example")
    print("=" * 60)

    nearly_split = MarkovChain(["x", "y"], [[0.995, 0.005], [0.005, 0.995]])
    print(f"\n   Default tolerance: {len(nearly_split.steady_states())} stationary vector(s)")
    with AnalysisContext(eigen_tolerance=0.05):
        print(f"   Context active: {AnalysisContext.is_active()}")
        print(f"   Loose tolerance: {len(nearly_split.steady_states())} stationary vector(s)")
    print(f"   Context active: {AnalysisContext.is_active()}")


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("dtmcflow Package Examples")
    print("=" * 60)

    structure_example()
    probabilities_example()
    passage_example()
    bayesian_example()
    context_manager_example()

    print("\n" + "=" * 60)
    print("Examples completed successfully!")
    print("=" * 60 + "\n")
