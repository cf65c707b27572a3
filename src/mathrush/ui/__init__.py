"""Presentation: pure view models and the NiceGUI page that draws them."""
