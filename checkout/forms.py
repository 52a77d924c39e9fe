from django import forms
from .models import Order

# Country choices: (code, display_name)
COUNTRY_CHOICES = [
    ('US', 'United States'),
]
# Lower 48 states (abbrev, full_name)
STATE_CHOICES = [
    ('AL', 'Alabama'),
    ('AZ', 'Arizona'),
    ('AR', 'Arkansas'),
    ('CA', 'California'),
    ('CO', 'Colorado'),
    ('CT', 'Connecticut'),
    ('DE', 'Delaware'),
    ('FL', 'Florida'),
    ('GA', 'Georgia'),
    ('ID', 'Idaho'),
    ('IL', 'Illinois'),
    ('IN', 'Indiana'),
    ('IA', 'Iowa'),
    ('KS', 'Kansas'),
    ('KY', 'Kentucky'),
    ('LA', 'Louisiana'),
    ('ME', 'Maine'),
    ('MD', 'Maryland'),
    ('MA', 'Massachusetts'),
    ('MI', 'Michigan'),
    ('MN', 'Minnesota'),
    ('MS', 'Mississippi'),
    ('MO', 'Missouri'),
    ('MT', 'Montana'),
    ('NE', 'Nebraska'),
    ('NV', 'Nevada'),
    ('NH', 'New Hampshire'),
    ('NJ', 'New Jersey'),
    ('NM', 'New Mexico'),
    ('NY', 'New York'),
    ('NC', 'North Carolina'),
    ('ND', 'North Dakota'),
    ('OH', 'Ohio'),
    ('OK', 'Oklahoma'),
    ('OR', 'Oregon'),
    ('PA', 'Pennsylvania'),
    ('RI', 'Rhode Island'),
    ('SC', 'South Carolina'),
    ('SD', 'South Dakota'),
    ('TN', 'Tennessee'),
    ('TX', 'Texas'),
    ('UT', 'Utah'),
    ('VT', 'Vermont'),
    ('VA', 'Virginia'),
    ('WA', 'Washington'),
    ('WV', 'West Virginia'),
    ('WI', 'Wisconsin'),
    ('WY', 'Wyoming'),
]

ADDRESS_FIELDS = [
    'first_name', 'last_name', 'phone', 'email', 'address_line_1',
    'address_line_2', 'city', 'state', 'country', 'zip_code',
]
STATE_FIELD_CHOICES = [('', 'Select State')] + STATE_CHOICES


def _format_phone(phone):
    if phone:
        digits = ''.join(filter(str.isdigit, phone))
        if len(digits) == 10:
            return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    return phone


class OrderForm(forms.ModelForm):
    """Billing and shipping address of the checkout address step."""

    class Meta:
        model = Order
        fields = ADDRESS_FIELDS + [f'shipping_{name}' for name in ADDRESS_FIELDS]
        widgets = {
            'email': forms.EmailInput(attrs={'autocomplete': 'email'}),
            'phone': forms.TextInput(attrs={'maxlength': '12', 'autocomplete': 'tel'}),
            'shipping_email': forms.EmailInput(attrs={'autocomplete': 'email'}),
            'shipping_phone': forms.TextInput(attrs={'maxlength': '12', 'autocomplete': 'tel'}),
        }

    state = forms.ChoiceField(choices=STATE_FIELD_CHOICES, label="State")
    shipping_state = forms.ChoiceField(choices=STATE_FIELD_CHOICES, label="Shipping State", required=False)
    country = forms.ChoiceField(choices=COUNTRY_CHOICES, initial='US', label='Country')
    shipping_country = forms.ChoiceField(
        choices=COUNTRY_CHOICES,
        initial='US',
        label='Shipping Country',
        required=False,
        help_text='Defaults to the billing country if blank',
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.widget.attrs.setdefault('class', 'form-control')

    def clean_city(self):
        city = self.cleaned_data.get('city')
        return city.title() if city else city

    def clean_shipping_city(self):
        shipping_city = self.cleaned_data.get('shipping_city')
        return shipping_city.title() if shipping_city else shipping_city

    def clean_phone(self):
        return _format_phone(self.cleaned_data.get('phone'))

    def clean_shipping_phone(self):
        return _format_phone(self.cleaned_data.get('shipping_phone'))
