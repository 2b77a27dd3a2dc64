"""Interactive set entry via questionary."""

import click
import questionary
from questionary import Style

from ..errors import ValidationError
from ..models.draft import ExerciseDraft
from .base import describe_sets, echo_error

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)

ADD_SET = "add_set"
ADD_DROP_SET = "add_drop_set"
SET_REST = "set_rest"
DONE = "done"
CANCEL = "cancel"


class ExerciseEditor:
    """Prompts for sets, drop sets and rest time until the user confirms."""

    def __init__(self, draft: ExerciseDraft):
        self.draft = draft

    async def run(self) -> bool:
        """Edit the draft. Returns False if the user cancelled."""
        exercise = self.draft.exercise
        click.echo()
        click.echo(click.style(exercise.name, bold=True))
        if exercise.force:
            click.echo(f"Force: {exercise.force}")
        if exercise.primary_muscles:
            click.echo(f"Primary Muscle: {', '.join(exercise.primary_muscles)}")
        if exercise.secondary_muscles:
            click.echo(f"Secondary Muscle: {', '.join(exercise.secondary_muscles)}")

        while True:
            action = await questionary.select(
                "What next?",
                choices=self._choices(),
                style=custom_style,
            ).ask_async()

            if action is None or action == CANCEL:
                return False
            if action == DONE:
                return True

            try:
                if action == ADD_SET:
                    reps, weight = await self._ask_reps_and_weight("set")
                    self.draft.add_set(reps, weight)
                elif action == ADD_DROP_SET:
                    reps, weight = await self._ask_reps_and_weight("drop set")
                    self.draft.add_drop_set(reps, weight)
                elif action == SET_REST:
                    seconds = await questionary.text(
                        "Rest time in seconds:", style=custom_style
                    ).ask_async()
                    self.draft.set_rest_time(seconds)
            except ValidationError as e:
                echo_error(str(e))
                continue

            for line in describe_sets(self.draft.to_record()):
                click.echo(f"  {line}")

    def _choices(self) -> list[questionary.Choice]:
        choices = [questionary.Choice("Add set", ADD_SET)]
        if self.draft.sets:
            choices.append(questionary.Choice("Add drop set", ADD_DROP_SET))
        choices.extend(
            [
                questionary.Choice(f"Rest time ({self.draft.rest_time_seconds}s)", SET_REST),
                questionary.Choice("Save exercise", DONE),
                questionary.Choice("Cancel", CANCEL),
            ]
        )
        return choices

    async def _ask_reps_and_weight(self, label: str) -> tuple[str, str]:
        reps = await questionary.text(f"Reps for the {label}:", style=custom_style).ask_async()
        weight = await questionary.text(
            f"Weight for the {label} (lbs):", style=custom_style
        ).ask_async()
        return reps, weight
