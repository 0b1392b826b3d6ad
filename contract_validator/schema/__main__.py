"""Module entrypoint for `python -m contract_validator.schema`.

Delegates to the schema validation CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
