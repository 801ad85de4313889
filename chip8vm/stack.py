"""CHIP-8 call stack operations."""

import jax.numpy as jnp
from flax.struct import dataclass, field

from chip8vm.constants import ADDRESS_MASK, STACK_SIZE
from chip8vm.errors import StackOverflowError, StackUnderflowError


@dataclass(frozen=True)
class StackState:
    """Bounded LIFO with a capacity fixed at construction."""
    data: jnp.ndarray
    head: int = 0
    capacity: int = field(pytree_node=False, default=STACK_SIZE)

    def __len__(self) -> int:
        return int(self.head)

    def items(self) -> list[int]:
        """Stored items, bottom first."""
        return [int(value) for value in self.data[:int(self.head)]]


def create_stack(capacity: int = STACK_SIZE, dtype=jnp.uint16) -> StackState:
    """Create an empty stack holding at most ``capacity`` items."""
    if capacity < 0:
        raise ValueError(f"invalid stack capacity {capacity}")
    return StackState(data=jnp.zeros(capacity, dtype=dtype), head=0, capacity=capacity)


def push(stack: StackState, item) -> StackState:
    """Push item onto stack."""
    head = int(stack.head)
    if head >= stack.capacity:
        raise StackOverflowError(f"stack overflow, capacity {stack.capacity} exhausted")
    new_data = stack.data.at[head].set(item)
    return stack.replace(data=new_data, head=head + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop the most recently pushed item."""
    head = int(stack.head)
    if head == 0:
        raise StackUnderflowError("stack underflow, pop from empty stack")
    new_head = head - 1
    item = stack.data[new_head]
    new_data = stack.data.at[new_head].set(0)
    return stack.replace(data=new_data, head=new_head), item


def peek(stack: StackState) -> jnp.ndarray:
    head = int(stack.head)
    if head == 0:
        raise StackUnderflowError("stack is empty")
    return stack.data[head - 1]


def push_address(stack: StackState, address) -> StackState:
    """Push a return address, masked to 12 bits."""
    return push(stack, jnp.astype(address, jnp.uint16) & ADDRESS_MASK)
