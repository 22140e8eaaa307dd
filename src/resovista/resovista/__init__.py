"""ResoVista backend package.

Organized by feature modules (users, attendance, exams, marks, ...) over a
flat key-value store, with a thin Flask controller layer on top of the
service/repository layers.
"""
