"""Seeds the widget, dashboard and layout tables of the MPFM monitoring UI."""
