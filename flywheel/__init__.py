"""flywheel: workflow state machines and work-item state transitions."""
