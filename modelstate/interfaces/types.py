# modelstate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Union

StateID = str

# Callback Types
InitialStateFunc = Callable[[Any], StateID]
PreCreateHook = Callable[[Any], bool]

InitialStateRule = Union[StateID, InitialStateFunc]
