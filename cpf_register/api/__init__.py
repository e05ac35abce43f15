"""HTTP blueprints for the CPF registration service."""
