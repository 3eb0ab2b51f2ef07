from dpll_search import DPLLEngine, Outcome, SolverConfig, TextRenderer, parse_clauses

# Example: (a OR b) AND (NOT a OR c) AND (NOT b OR NOT c)
clauses, names = parse_clauses("a b\n-a c\n-b -c\n")

# Step through the search, drawing the tree after every decision
engine = DPLLEngine(SolverConfig(step_by_step=True), renderer=TextRenderer())
outcome = engine.solve(clauses)
while outcome is Outcome.OPEN:
    outcome = engine.step()

print(engine.printable_solution(names))
