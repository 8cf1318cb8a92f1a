from regcolor.allocators.allocator import Allocator, AllocationResult
