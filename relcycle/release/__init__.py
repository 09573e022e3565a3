"""Release domain.

- version: version string model and arithmetic
- descriptor: reading and rewriting the project descriptor
- deploy: deploy strategy selection
- fsm: step-table state machine driver
- orchestrator: the release workflow
- errors: failure types shared by all of the above
"""

from __future__ import annotations
