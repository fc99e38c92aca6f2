from vec.util.transactional import Transaction, \
    uninitialized_fill, uninitialized_copy, destroy_range, discard_block
