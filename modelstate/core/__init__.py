"""
Core package: the machine definition model and its runtime binding to host
objects.

- states.py, events.py, transitions.py: immutable building blocks
- definition.py: StateMachineDefinition and DefinitionBuilder
- validations.py: declaration-time rules raising DefinitionError
- machine.py: MachineInstance, firing events against one object
- hooks.py: lifecycle observers
"""
