"""Module entrypoint for `python -m contract_validator.asyncapi`.

Delegates to the AsyncAPI validation CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
