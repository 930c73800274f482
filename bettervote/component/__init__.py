'''Building blocks shared by the counting methods.'''
